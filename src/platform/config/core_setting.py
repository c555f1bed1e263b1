from pathlib import Path

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Checkout Lease Coordinator'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # Reservation API
    API_BASE_URL: str = 'http://localhost:3001'
    API_TOKEN: SecretStr = SecretStr('')
    HTTP_TIMEOUT_SECONDS: float = 10.0
    BEACON_TIMEOUT_SECONDS: float = 2.0  # Short: beacons are fired while tearing down

    RELEASE_RESERVATIONS_PATH: str = '/api/tickets/release'
    RELEASE_RESERVATIONS_BEACON_PATH: str = '/api/tickets/release/beacon'
    PURCHASE_PATH: str = '/api/tickets/purchase'
    EVENT_DETAIL_PATH: str = '/api/events/{event_id}'

    # Lease countdown (advisory, the server owns the real expiry)
    LEASE_WINDOW_SECONDS: int = 600
    LEASE_TICK_INTERVAL_SECONDS: float = 1.0

    # Page routes
    EVENT_PAGE_PATH: str = '/events/{event_id}'
    FREE_CONFIRMATION_PATH: str = '/checkout/success'

    @field_validator('API_BASE_URL', mode='before')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip('/')
        return v

    @field_validator('LEASE_WINDOW_SECONDS')
    @classmethod
    def positive_window(cls, v: int) -> int:
        if v <= 0:
            raise ValueError('LEASE_WINDOW_SECONDS must be positive')
        return v


settings = Settings()  # type: ignore
