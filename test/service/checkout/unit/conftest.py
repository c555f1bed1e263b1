"""
Conftest for checkout unit tests - in-memory reservation API, no network.
"""

from typing import Optional

import anyio
import pytest

from src.platform.exception.exceptions import ReservationApiError
from src.service.checkout.app.command.release_trigger_arbiter import ReleaseTriggerArbiter
from src.service.checkout.app.dto import BeaconData, EventSummary, PurchaseRequest, PurchaseResult
from src.service.checkout.app.interface import IReservationApi
from src.service.checkout.domain.entity.reservation_lease import ReservationLease
from src.service.checkout.domain.value_object import LineItem
from src.service.checkout.driven_adapter.navigation.session_navigator import SessionNavigator
from test.constants import (
    CHECKOUT_URL,
    EVENT_ID,
    ORDER_ID,
    TICKET_TYPE_X,
    TICKET_TYPE_Y,
    X_PRICE,
    X_RESERVED_IDS,
    Y_PRICE,
    Y_RESERVED_IDS,
)


class FakeReservationApi(IReservationApi):
    """In-memory reservation service that counts every call it receives"""

    def __init__(self) -> None:
        self.release_calls = 0
        self.beacon_data_requests = 0
        self.purchase_requests: list[PurchaseRequest] = []
        self.release_error: Optional[Exception] = None
        self.purchase_error: Optional[Exception] = None
        self.purchase_result = PurchaseResult(
            is_free=False, checkout_url=CHECKOUT_URL, order_id=ORDER_ID
        )
        self.event = EventSummary(id=EVENT_ID, title='Launch Party', category='concert')
        # Optional gates, created by async tests to hold a call open
        self.release_gate: Optional[anyio.Event] = None
        self.purchase_gate: Optional[anyio.Event] = None
        self.purchase_started: Optional[anyio.Event] = None

    async def release_reservations(self) -> None:
        self.release_calls += 1
        if self.release_gate is not None:
            await self.release_gate.wait()
        if self.release_error is not None:
            raise self.release_error

    def get_release_reservations_beacon_data(self) -> BeaconData:
        self.beacon_data_requests += 1
        return BeaconData(url='http://reservation.test/api/tickets/release/beacon', payload=b'{}')

    async def purchase(self, request: PurchaseRequest) -> PurchaseResult:
        self.purchase_requests.append(request)
        if self.purchase_started is not None:
            self.purchase_started.set()
        if self.purchase_gate is not None:
            await self.purchase_gate.wait()
        if self.purchase_error is not None:
            raise self.purchase_error
        return self.purchase_result

    async def get_event(self, *, event_id: str) -> EventSummary:
        if event_id != self.event.id:
            raise ReservationApiError('Event not found', status_code=404)
        return self.event


class RecordingBeaconSender:
    def __init__(self, *, accept: bool = True) -> None:
        self.accept = accept
        self.sent: list[tuple[str, bytes]] = []

    def send(self, *, url: str, payload: bytes) -> bool:
        self.sent.append((url, payload))
        return self.accept


def make_lease(
    *,
    x_price: int = X_PRICE,
    y_price: int = Y_PRICE,
    expires_in_seconds: int = 600,
) -> ReservationLease:
    return ReservationLease.create(
        event_id=EVENT_ID,
        line_items=[
            LineItem.create(
                ticket_type_id=TICKET_TYPE_X,
                name='General',
                quantity=2,
                unit_price=x_price,
                reserved_ticket_ids=X_RESERVED_IDS,
            ),
            LineItem.create(
                ticket_type_id=TICKET_TYPE_Y,
                name='Balcony',
                quantity=1,
                unit_price=y_price,
                reserved_ticket_ids=Y_RESERVED_IDS,
            ),
        ],
        expires_in_seconds=expires_in_seconds,
    )


@pytest.fixture
def reservation_api() -> FakeReservationApi:
    return FakeReservationApi()


@pytest.fixture
def beacon_sender() -> RecordingBeaconSender:
    return RecordingBeaconSender()


@pytest.fixture
def navigator() -> SessionNavigator:
    return SessionNavigator()


@pytest.fixture
def lease() -> ReservationLease:
    return make_lease()


@pytest.fixture
def arbiter(lease: ReservationLease, reservation_api: FakeReservationApi) -> ReleaseTriggerArbiter:
    return ReleaseTriggerArbiter(lease=lease, reservation_api=reservation_api)
