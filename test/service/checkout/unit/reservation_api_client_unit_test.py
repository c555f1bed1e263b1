"""
Unit tests for ReservationApiClient

Runs the real httpx client against httpx.MockTransport.
"""

from typing import Callable

import httpx
import orjson
import pytest

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import ReservationApiError
from src.service.checkout.app.dto import PurchaseRequest, PurchaseResult, TicketQuantity
from src.service.checkout.driven_adapter.http.reservation_api_client import ReservationApiClient
from test.constants import CHECKOUT_URL, EVENT_ID, ORDER_ID, TICKET_TYPE_X, X_RESERVED_IDS


BASE_URL = 'http://reservation.test'

Handler = Callable[[httpx.Request], httpx.Response]


def _client(handler: Handler, *, token: str = 'secret-token') -> ReservationApiClient:
    settings = Settings(API_BASE_URL=f'{BASE_URL}/', API_TOKEN=token)  # type: ignore[arg-type]
    http = httpx.AsyncClient(base_url=settings.API_BASE_URL, transport=httpx.MockTransport(handler))
    return ReservationApiClient(settings=settings, client=http)


def _purchase_request() -> PurchaseRequest:
    return PurchaseRequest(
        event_id=EVENT_ID,
        tickets=[TicketQuantity(ticket_type_id=TICKET_TYPE_X, quantity=2)],
        specific_ticket_ids=list(X_RESERVED_IDS),
    )


class TestReleaseReservations:
    @pytest.mark.asyncio
    async def test_posts_with_bearer_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        await _client(handler).release_reservations()

        (request,) = seen
        assert request.method == 'POST'
        assert request.url.path == '/api/tickets/release'
        assert request.headers['Authorization'] == 'Bearer secret-token'

    @pytest.mark.asyncio
    async def test_no_authorization_header_without_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={'released': 0})

        await _client(handler, token='').release_reservations()

        assert 'Authorization' not in seen[0].headers

    @pytest.mark.asyncio
    async def test_error_body_message_is_used(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={'message': 'Inventory service down'})

        with pytest.raises(ReservationApiError) as exc_info:
            await _client(handler).release_reservations()

        assert exc_info.value.message == 'Inventory service down'
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_error_without_json_body_uses_default_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(502, content=b'<html>Bad Gateway</html>')

        with pytest.raises(ReservationApiError, match='An error occurred'):
            await _client(handler).release_reservations()

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('connection refused', request=request)

        with pytest.raises(ReservationApiError) as exc_info:
            await _client(handler).release_reservations()

        assert exc_info.value.status_code == 503


class TestBeaconData:
    def test_beacon_carries_token_in_body(self) -> None:
        beacon = _client(lambda r: httpx.Response(204)).get_release_reservations_beacon_data()

        assert beacon.url == f'{BASE_URL}/api/tickets/release/beacon'
        assert orjson.loads(beacon.payload) == {'token': 'secret-token'}

    def test_beacon_without_token(self) -> None:
        beacon = _client(lambda r: httpx.Response(204), token='').get_release_reservations_beacon_data()

        assert orjson.loads(beacon.payload) == {}


class TestPurchase:
    @pytest.mark.asyncio
    async def test_paid_purchase(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(orjson.loads(request.content))
            return httpx.Response(
                200, json={'isFree': False, 'checkoutUrl': CHECKOUT_URL, 'orderId': ORDER_ID}
            )

        result = await _client(handler).purchase(_purchase_request())

        assert result == PurchaseResult(is_free=False, checkout_url=CHECKOUT_URL, order_id=ORDER_ID)
        assert bodies == [
            {
                'eventId': EVENT_ID,
                'tickets': [{'ticketTypeId': TICKET_TYPE_X, 'quantity': 2}],
                'specificTicketIds': list(X_RESERVED_IDS),
            }
        ]

    @pytest.mark.asyncio
    async def test_free_purchase(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json={'isFree': True, 'orderId': 12})

        result = await _client(handler).purchase(_purchase_request())

        assert result == PurchaseResult(is_free=True, checkout_url=None, order_id='12')

    @pytest.mark.asyncio
    async def test_validation_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, json={'message': 'Reservation expired'})

        with pytest.raises(ReservationApiError, match='Reservation expired'):
            await _client(handler).purchase(_purchase_request())

    @pytest.mark.asyncio
    async def test_non_object_response_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=['unexpected'])

        with pytest.raises(ReservationApiError):
            await _client(handler).purchase(_purchase_request())


class TestGetEvent:
    @pytest.mark.asyncio
    async def test_get_event(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == f'/api/events/{EVENT_ID}'
            return httpx.Response(
                200,
                json={
                    'id': EVENT_ID,
                    'title': 'Launch Party',
                    'category': 'concert',
                    'isOnline': False,
                    'venue': None,
                    'address': '1 Main St',
                },
            )

        event = await _client(handler).get_event(event_id=EVENT_ID)

        assert event.title == 'Launch Party'
        assert event.location == '1 Main St'
