"""
Checkout Page

Owns one ReservationLease for its whole lifetime and wires the lease timer,
the release arbiter, the navigation adapter and the purchase finalizer
together. Exposes the view state a renderer needs.
"""

from contextlib import asynccontextmanager
from decimal import Decimal
from typing import AsyncIterator, Optional

import anyio

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger
from src.service.checkout.app.command.purchase_finalizer_use_case import (
    PurchaseFinalizerUseCase,
)
from src.service.checkout.app.command.release_trigger_arbiter import ReleaseTriggerArbiter
from src.service.checkout.app.dto import EventSummary
from src.service.checkout.app.interface import IBeaconSender, INavigator, IReservationApi
from src.service.checkout.app.service.lease_timer import LeaseTimer
from src.service.checkout.domain.entity.reservation_lease import ReservationLease
from src.service.checkout.domain.value_object import CheckoutOutcome, Failed, LineItem
from src.service.checkout.driving_adapter.navigation_release_adapter import (
    NavigationReleaseAdapter,
)


class CheckoutPage:
    def __init__(
        self,
        *,
        lease: ReservationLease,
        reservation_api: IReservationApi,
        beacon_sender: IBeaconSender,
        navigator: INavigator,
        event_page_path: str = '/events/{event_id}',
        free_confirmation_path: str = '/checkout/success',
        tick_interval: float = 1.0,
    ) -> None:
        self.lease = lease
        self.reservation_api = reservation_api
        self.navigator = navigator
        self.arbiter = ReleaseTriggerArbiter(lease=lease, reservation_api=reservation_api)
        self.navigation = NavigationReleaseAdapter(
            arbiter=self.arbiter,
            beacon_sender=beacon_sender,
            navigator=navigator,
            event_page_path=event_page_path,
        )
        self.finalizer = PurchaseFinalizerUseCase(
            arbiter=self.arbiter,
            reservation_api=reservation_api,
            navigator=navigator,
            free_confirmation_path=free_confirmation_path,
        )
        self.timer = LeaseTimer(
            on_expire=self.navigation.on_timer_expired,
            window_seconds=lease.expires_in_seconds,
            tick_interval=tick_interval,
        )

        self.event: Optional[EventSummary] = None
        self.is_loading = True
        self.is_checking_out = False
        self.error: Optional[str] = None

    # ---- view state ----

    @property
    def line_items(self) -> tuple[LineItem, ...]:
        return self.lease.line_items

    @property
    def total_amount(self) -> Decimal:
        return self.lease.total_amount

    @property
    def remaining_display(self) -> str:
        return self.timer.display

    @property
    def button_label(self) -> str:
        free = self.lease.is_free_selection
        if self.is_checking_out:
            return 'Reserving...' if free else 'Processing...'
        return 'Reserve Free Tickets' if free else 'Proceed to Payment'

    @property
    def helper_text(self) -> str:
        if self.lease.is_free_selection:
            return 'Your tickets will be emailed to you after reservation'
        return 'You will be redirected to our secure payment provider'

    # ---- lifecycle ----

    @asynccontextmanager
    async def mounted(self) -> AsyncIterator['CheckoutPage']:
        async with anyio.create_task_group() as tg:
            await tg.start(self.timer.run)
            Logger.base.info(
                f'🛒 [CHECKOUT] Mounted for event {self.lease.event_id}, '
                f'{len(self.lease.reserved_ticket_ids())} tickets, {self.remaining_display} left'
            )
            try:
                yield self
            finally:
                self.timer.stop()
                with anyio.CancelScope(shield=True):
                    await self.navigation.on_teardown()
                tg.cancel_scope.cancel()
                Logger.base.info(f'🛒 [CHECKOUT] Unmounted, lease {self.lease.release_state}')

    @Logger.io
    async def load_event(self) -> Optional[EventSummary]:
        self.is_loading = True
        try:
            self.event = await self.reservation_api.get_event(event_id=self.lease.event_id)
        except CustomBaseError as e:
            self.error = e.message or 'Failed to load event details'
        finally:
            self.is_loading = False
        return self.event

    # ---- user actions ----

    @Logger.io
    async def click_purchase(self) -> Optional[CheckoutOutcome]:
        if self.is_checking_out:
            return None
        self.is_checking_out = True
        self.error = None

        outcome = await self.finalizer.execute()
        if isinstance(outcome, Failed):
            self.error = outcome.error
            self.is_checking_out = False
        else:
            self.timer.stop()
        return outcome

    async def click_back_to_event(self) -> None:
        self.timer.stop()
        await self.navigation.on_back_to_event()

    def on_unload(self) -> None:
        self.timer.stop()
        self.navigation.on_unload()
