"""
Thread Beacon Sender

Process-level equivalent of navigator.sendBeacon: the POST runs on a
non-daemon thread, so the interpreter waits for it at shutdown even though the
caller never does.
"""

import threading
from typing import Optional

import httpx

from src.platform.logging.loguru_io import Logger


class ThreadBeaconSender:
    def __init__(
        self, *, timeout: float = 2.0, transport: Optional[httpx.BaseTransport] = None
    ) -> None:
        self.timeout = timeout
        self.transport = transport

    def send(self, *, url: str, payload: bytes) -> bool:
        try:
            thread = threading.Thread(
                target=self._post,
                kwargs={'url': url, 'payload': payload},
                name='release-beacon',
                daemon=False,
            )
            thread.start()
        except RuntimeError as e:
            # Interpreter already finalizing
            Logger.base.warning(f'[BEACON] Could not start beacon thread: {e}')
            return False
        return True

    def _post(self, *, url: str, payload: bytes) -> None:
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    url, content=payload, headers={'Content-Type': 'application/json'}
                )
            Logger.base.info(f'[BEACON] Delivered to {url}: {response.status_code}')
        except httpx.HTTPError as e:
            Logger.base.warning(f'[BEACON] Delivery to {url} failed: {e}')
