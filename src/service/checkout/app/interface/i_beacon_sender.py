from typing import Protocol


class IBeaconSender(Protocol):
    """Best-effort, non-blocking delivery that is still attempted while the host shuts down"""

    def send(self, *, url: str, payload: bytes) -> bool:
        """Returns True when the payload was queued for delivery."""
        ...
