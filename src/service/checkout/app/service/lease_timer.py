"""
Lease Timer

Counts the checkout window down once per tick and fires `on_expire` exactly
once when it reaches zero. The countdown is advisory: the reservation service
expires the lease on its own clock.
"""

from typing import Awaitable, Callable

import anyio
from anyio.abc import TaskStatus

from src.platform.logging.loguru_io import Logger


OnExpire = Callable[[], Awaitable[None]]


def format_remaining(seconds: int) -> str:
    """600 -> '10:00', 45 -> '0:45'"""
    seconds = max(seconds, 0)
    return f'{seconds // 60}:{seconds % 60:02d}'


class LeaseTimer:
    def __init__(
        self,
        *,
        on_expire: OnExpire,
        window_seconds: int = 600,
        tick_interval: float = 1.0,
    ) -> None:
        self._on_expire = on_expire
        self._remaining = window_seconds
        self._tick_interval = tick_interval
        self._expired = False
        self._stopped = False
        self._cancel_scope: anyio.CancelScope | None = None

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def display(self) -> str:
        return format_remaining(self._remaining)

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def running(self) -> bool:
        return not (self._expired or self._stopped)

    def tick(self) -> bool:
        """Advance one second. Returns True only on the tick that expires the lease."""
        if not self.running:
            return False
        self._remaining = max(self._remaining - 1, 0)
        if self._remaining == 0:
            self._expired = True
            return True
        return False

    def stop(self) -> None:
        """Unmount: no tick is observable after this returns."""
        self._stopped = True
        if self._cancel_scope is not None:
            self._cancel_scope.cancel()

    async def run(self, *, task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED) -> None:
        fired = False
        with anyio.CancelScope() as scope:
            self._cancel_scope = scope
            task_status.started()
            while self.running:
                await anyio.sleep(self._tick_interval)
                if self.tick():
                    fired = True
                    break

        if fired:
            Logger.base.info('⏰ [LEASE] Countdown reached 0:00')
            await self._on_expire()
