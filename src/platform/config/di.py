"""
https://python-dependency-injector.ets-labs.org/index.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.service.checkout.domain.entity.reservation_lease import ReservationLease
from src.service.checkout.driven_adapter.beacon.thread_beacon_sender import ThreadBeaconSender
from src.service.checkout.driven_adapter.http.reservation_api_client import (
    ReservationApiClient,
)
from src.service.checkout.driven_adapter.navigation.session_navigator import SessionNavigator
from src.service.checkout.driving_adapter.checkout_page import CheckoutPage
from src.service.checkout.driving_adapter.schema.selected_ticket_schema import (
    parse_selected_tickets,
)


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Driven adapters
    reservation_api = providers.Singleton(ReservationApiClient, settings=config_service)
    beacon_sender = providers.Singleton(
        ThreadBeaconSender,
        timeout=config_service.provided.BEACON_TIMEOUT_SECONDS,
    )

    # One navigator per checkout page
    navigator = providers.Factory(SessionNavigator)

    checkout_page = providers.Factory(
        CheckoutPage,
        reservation_api=reservation_api,
        beacon_sender=beacon_sender,
        event_page_path=config_service.provided.EVENT_PAGE_PATH,
        free_confirmation_path=config_service.provided.FREE_CONFIRMATION_PATH,
        tick_interval=config_service.provided.LEASE_TICK_INTERVAL_SECONDS,
    )


container = Container()


def build_checkout_page(
    *, event_id: str, tickets_param: str | None
) -> tuple[CheckoutPage, SessionNavigator]:
    """Mount-time wiring: selection from the URL -> lease -> page bound to a fresh navigator."""
    settings = container.config_service()
    lease = ReservationLease.create(
        event_id=event_id,
        line_items=parse_selected_tickets(tickets_param),
        expires_in_seconds=settings.LEASE_WINDOW_SECONDS,
    )
    navigator = container.navigator()
    page = container.checkout_page(lease=lease, navigator=navigator)
    return page, navigator
