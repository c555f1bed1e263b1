"""
Checkout Session Runner

Hosts a CheckoutPage inside a process. The page stays mounted until it
navigates somewhere (purchase, back to event, expiry) or the process receives
SIGINT/SIGTERM, the process-level equivalent of closing the tab. On a signal
the beacon release fires first, then the page unmounts.
"""

from contextlib import nullcontext
import signal
import sys

import anyio

from src.platform.config.di import build_checkout_page, container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.checkout.driven_adapter.navigation.session_navigator import SessionNavigator
from src.service.checkout.driving_adapter.checkout_page import CheckoutPage


async def run_checkout_session(
    page: CheckoutPage,
    navigator: SessionNavigator,
    *,
    handle_signals: bool = True,
) -> str | None:
    """
    Returns:
        Where the page navigated to, or None if the session ended on a signal
    """
    destination: str | None = None

    # Signals map to on_unload from before mount through event loading
    signal_receiver = (
        anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM)
        if handle_signals
        else nullcontext(None)
    )
    with signal_receiver as signals:
        async with page.mounted():
            async with anyio.create_task_group() as tg:

                async def wait_for_navigation() -> None:
                    nonlocal destination
                    destination = await navigator.wait_navigated()
                    tg.cancel_scope.cancel()

                async def signal_watcher() -> None:
                    async for signum in signals:
                        Logger.base.info(f'🛑 [CHECKOUT] Received signal {signum}, unloading')
                        page.on_unload()
                        tg.cancel_scope.cancel()
                        break

                if signals is not None:
                    tg.start_soon(signal_watcher)
                tg.start_soon(wait_for_navigation)

                await page.load_event()

    Logger.base.info(f'👋 [CHECKOUT] Session finished, outcome: {page.lease.outcome}')
    return destination


async def main(event_id: str | None = None, tickets_param: str | None = None) -> str | None:
    tracing = TracingConfig(service_name='checkout')
    tracing.setup()
    tracing.instrument_httpx()
    Logger.base.info('📊 [CHECKOUT] Tracing initialized')

    try:
        page, navigator = build_checkout_page(event_id=event_id or '', tickets_param=tickets_param)
        return await run_checkout_session(page, navigator)
    except DomainError as e:
        Logger.base.error(f'❌ [CHECKOUT] Cannot open checkout: {e.message}')
        return None
    finally:
        await container.reservation_api().aclose()
        tracing.shutdown()
        Logger.base.info('👋 [CHECKOUT] Shutdown complete')


if __name__ == '__main__':
    # python -m src.service.checkout.driving_adapter.checkout_session_runner <event_id> '<tickets json>'
    anyio.run(main, *sys.argv[1:3])  # type: ignore[arg-type]
