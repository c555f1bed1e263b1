"""
Purchase Finalizer Use Case

Flow:
1. Refuse if the lease was already released
2. suppress() the arbiter, synchronously, before any network call
3. Purchase exactly the ticket ids frozen at suppression
4. Free order -> confirmation page, paid order -> payment page URL

Failures never release the lease: it stays suppressed and the same ticket ids
are reused when the user retries.
"""

from collections import Counter
from urllib.parse import urlencode

import anyio
from opentelemetry import trace

from src.platform.exception.exceptions import (
    CustomBaseError,
    LeaseReleasedError,
    MissingCheckoutUrlError,
)
from src.platform.logging.loguru_io import Logger
from src.service.checkout.app.command.release_trigger_arbiter import ReleaseTriggerArbiter
from src.service.checkout.app.dto import PurchaseRequest, PurchaseResult, TicketQuantity
from src.service.checkout.app.interface import INavigator, IReservationApi
from src.service.checkout.domain.value_object import CheckoutOutcome, Failed, Purchased


DEFAULT_PURCHASE_ERROR = 'Failed to process checkout'


class PurchaseFinalizerUseCase:
    def __init__(
        self,
        *,
        arbiter: ReleaseTriggerArbiter,
        reservation_api: IReservationApi,
        navigator: INavigator,
        free_confirmation_path: str,
    ) -> None:
        self.arbiter = arbiter
        self.reservation_api = reservation_api
        self.navigator = navigator
        self.free_confirmation_path = free_confirmation_path
        self.tracer = trace.get_tracer(__name__)

    @Logger.io
    async def execute(self) -> CheckoutOutcome:
        lease = self.arbiter.lease

        try:
            self.arbiter.suppress()
        except LeaseReleasedError as e:
            # lease.outcome keeps the Released record
            return Failed(error=e.message)

        request = self.build_request()

        with self.tracer.start_as_current_span(
            'checkout.purchase',
            attributes={
                'event.id': lease.event_id,
                'ticket.count': len(request.specific_ticket_ids),
            },
        ):
            try:
                # The purchase may already be charged server-side; never abandon it midway
                with anyio.CancelScope(shield=True):
                    result = await self.reservation_api.purchase(request)
                outcome = self._redirect(result)
            except CustomBaseError as e:
                Logger.base.warning(f'[PURCHASE] Attempt failed for event {lease.event_id}: {e}')
                return self._fail(e.message or DEFAULT_PURCHASE_ERROR)
            except Exception as e:
                Logger.base.exception(f'[PURCHASE] Unexpected error: {e}')
                return self._fail(DEFAULT_PURCHASE_ERROR)

        lease.record_outcome(outcome)
        return outcome

    def build_request(self) -> PurchaseRequest:
        lease = self.arbiter.lease
        ticket_ids = lease.purchase_ticket_ids
        if ticket_ids is None:
            raise LeaseReleasedError('Purchase requested before the lease was suppressed')

        quantities: Counter[str] = Counter()
        for item in lease.line_items:
            quantities[item.ticket_type_id] += item.quantity

        return PurchaseRequest(
            event_id=lease.event_id,
            tickets=[
                TicketQuantity(ticket_type_id=type_id, quantity=quantity)
                for type_id, quantity in quantities.items()
            ],
            specific_ticket_ids=list(ticket_ids),
        )

    def free_confirmation_location(self, *, order_id: str | None) -> str:
        params = {'eventId': self.arbiter.lease.event_id}
        if order_id:
            params['orderId'] = order_id
        return f'{self.free_confirmation_path}?{urlencode(params)}'

    def _redirect(self, result: PurchaseResult) -> Purchased:
        if result.is_free:
            self.navigator.push(self.free_confirmation_location(order_id=result.order_id))
            Logger.base.info(f'[PURCHASE] Free order {result.order_id} confirmed')
            return Purchased(is_free=True, order_id=result.order_id)

        if not result.checkout_url:
            raise MissingCheckoutUrlError()

        self.navigator.push(result.checkout_url)
        Logger.base.info('[PURCHASE] Redirecting to payment page')
        return Purchased(
            is_free=False, checkout_url=result.checkout_url, order_id=result.order_id
        )

    def _fail(self, error: str) -> Failed:
        outcome = Failed(error=error)
        self.arbiter.lease.record_outcome(outcome)
        return outcome
