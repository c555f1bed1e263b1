"""
Reservation API Client

httpx implementation of IReservationApi. Every failure, HTTP or transport,
surfaces as ReservationApiError so callers only ever catch one type.
"""

from typing import Any, Optional

import httpx
import orjson

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import ReservationApiError
from src.platform.logging.loguru_io import Logger
from src.service.checkout.app.dto import BeaconData, EventSummary, PurchaseRequest, PurchaseResult
from src.service.checkout.app.interface import IReservationApi


DEFAULT_ERROR_MESSAGE = 'An error occurred'


class ReservationApiClient(IReservationApi):
    def __init__(self, *, settings: Settings, client: Optional[httpx.AsyncClient] = None) -> None:
        self.settings = settings
        self._token = settings.API_TOKEN.get_secret_value()
        self._client = client or httpx.AsyncClient(
            base_url=settings.API_BASE_URL,
            timeout=settings.HTTP_TIMEOUT_SECONDS,
        )

    def _headers(self) -> dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if self._token:
            headers['Authorization'] = f'Bearer {self._token}'
        return headers

    async def _request(self, method: str, path: str, *, json: Any = None) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                content=orjson.dumps(json) if json is not None else None,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            raise ReservationApiError(f'Reservation service unreachable: {e}') from e

        if not response.is_success:
            raise ReservationApiError(
                self._error_message(response), status_code=response.status_code
            )

        if not response.content:
            return None
        try:
            return orjson.loads(response.content)
        except orjson.JSONDecodeError as e:
            raise ReservationApiError(
                'Invalid response from reservation service', status_code=502
            ) from e

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = orjson.loads(response.content)
        except orjson.JSONDecodeError:
            return DEFAULT_ERROR_MESSAGE
        if isinstance(body, dict) and body.get('message'):
            return str(body['message'])
        return DEFAULT_ERROR_MESSAGE

    @Logger.io
    async def release_reservations(self) -> None:
        await self._request('POST', self.settings.RELEASE_RESERVATIONS_PATH)

    def get_release_reservations_beacon_data(self) -> BeaconData:
        # Beacons cannot carry headers, so the credential travels in the body
        payload: dict[str, str] = {}
        if self._token:
            payload['token'] = self._token
        return BeaconData(
            url=f'{self.settings.API_BASE_URL}{self.settings.RELEASE_RESERVATIONS_BEACON_PATH}',
            payload=orjson.dumps(payload),
        )

    @Logger.io
    async def purchase(self, request: PurchaseRequest) -> PurchaseResult:
        body = await self._request('POST', self.settings.PURCHASE_PATH, json=request.to_payload())
        if not isinstance(body, dict):
            raise ReservationApiError('Invalid purchase response', status_code=502)
        return PurchaseResult.from_payload(body)

    @Logger.io
    async def get_event(self, *, event_id: str) -> EventSummary:
        body = await self._request(
            'GET', self.settings.EVENT_DETAIL_PATH.format(event_id=event_id)
        )
        if not isinstance(body, dict) or 'id' not in body:
            raise ReservationApiError('Invalid event response', status_code=502)
        return EventSummary.from_payload(body)

    async def aclose(self) -> None:
        await self._client.aclose()
