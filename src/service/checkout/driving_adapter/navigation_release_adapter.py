"""
Navigation-Release Adapter

Maps every way of leaving the checkout page onto the arbiter:

    back to event   -> request_release(user_cancelled), then event page
    timer expiry    -> request_release(timed_out), then event page
    tab close       -> beacon release (page_unloaded), nothing awaited
    teardown        -> request_release(page_unloaded)

Unload and teardown can both fire for one navigation. The arbiter's state guard
is what keeps that to a single release; nothing here deduplicates.
"""

from src.platform.logging.loguru_io import Logger
from src.service.checkout.app.command.release_trigger_arbiter import ReleaseTriggerArbiter
from src.service.checkout.app.interface import IBeaconSender, INavigator
from src.service.checkout.domain.enum import ReleaseReason


class NavigationReleaseAdapter:
    def __init__(
        self,
        *,
        arbiter: ReleaseTriggerArbiter,
        beacon_sender: IBeaconSender,
        navigator: INavigator,
        event_page_path: str,
    ) -> None:
        self.arbiter = arbiter
        self.beacon_sender = beacon_sender
        self.navigator = navigator
        self.event_page_path = event_page_path

    @property
    def event_page_location(self) -> str:
        return self.event_page_path.format(event_id=self.arbiter.lease.event_id)

    @Logger.io
    async def on_back_to_event(self) -> None:
        try:
            await self.arbiter.request_release(ReleaseReason.USER_CANCELLED)
        finally:
            self.navigator.push(self.event_page_location)

    @Logger.io
    async def on_timer_expired(self) -> None:
        try:
            await self.arbiter.request_release(ReleaseReason.TIMED_OUT)
        finally:
            self.navigator.push(self.event_page_location)

    @Logger.io
    def on_unload(self) -> None:
        self.arbiter.request_beacon_release(self.beacon_sender)

    @Logger.io
    async def on_teardown(self) -> None:
        await self.arbiter.request_release(ReleaseReason.PAGE_UNLOADED)
