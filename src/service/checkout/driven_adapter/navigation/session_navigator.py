from typing import Optional

import anyio

from src.platform.logging.loguru_io import Logger


class SessionNavigator:
    """Records where the checkout page sent the user and wakes up whoever hosts it."""

    def __init__(self) -> None:
        self.history: list[str] = []
        self._navigated: Optional[anyio.Event] = None  # created inside the event loop

    @property
    def location(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def push(self, location: str) -> None:
        Logger.base.info(f'[NAVIGATE] -> {location}')
        self.history.append(location)
        if self._navigated is not None:
            self._navigated.set()

    async def wait_navigated(self) -> str:
        if not self.history:
            if self._navigated is None:
                self._navigated = anyio.Event()
            await self._navigated.wait()
        return self.history[-1]
