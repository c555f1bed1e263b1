"""
Unit tests for LeaseTimer

Manual tick() drives the 600 second window deterministically; run() is
exercised with a millisecond tick interval.
"""

import anyio
import pytest

from src.service.checkout.app.service.lease_timer import LeaseTimer, format_remaining


class ExpiryRecorder:
    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> None:
        self.calls += 1


@pytest.mark.parametrize(
    ('seconds', 'expected'),
    [(600, '10:00'), (599, '9:59'), (65, '1:05'), (45, '0:45'), (0, '0:00'), (-3, '0:00')],
)
def test_format_remaining(seconds: int, expected: str) -> None:
    assert format_remaining(seconds) == expected


class TestLeaseTimerTick:
    def test_expires_exactly_on_the_600th_tick(self) -> None:
        timer = LeaseTimer(on_expire=ExpiryRecorder(), window_seconds=600)

        expiring_ticks = [n for n in range(1, 700) if timer.tick()]

        assert expiring_ticks == [600]
        assert timer.remaining_seconds == 0
        assert timer.display == '0:00'
        assert timer.expired is True

    def test_no_ticks_after_stop(self) -> None:
        timer = LeaseTimer(on_expire=ExpiryRecorder(), window_seconds=600)
        timer.tick()
        timer.stop()

        assert timer.tick() is False
        assert timer.remaining_seconds == 599
        assert timer.running is False


class TestLeaseTimerRun:
    @pytest.mark.asyncio
    async def test_on_expire_fires_once(self) -> None:
        on_expire = ExpiryRecorder()
        timer = LeaseTimer(on_expire=on_expire, window_seconds=3, tick_interval=0.001)

        with anyio.fail_after(5):
            await timer.run()

        assert on_expire.calls == 1
        assert timer.display == '0:00'

        # Display stays at 0:00 and no second expiry can happen
        assert timer.tick() is False
        await anyio.sleep(0.01)
        assert on_expire.calls == 1
        assert timer.remaining_seconds == 0

    @pytest.mark.asyncio
    async def test_stop_during_countdown_prevents_expiry(self) -> None:
        on_expire = ExpiryRecorder()
        timer = LeaseTimer(on_expire=on_expire, window_seconds=600, tick_interval=0.001)

        with anyio.fail_after(5):
            async with anyio.create_task_group() as tg:
                await tg.start(timer.run)
                await anyio.sleep(0.02)
                timer.stop()

        remaining = timer.remaining_seconds
        await anyio.sleep(0.02)

        assert on_expire.calls == 0
        assert 0 < remaining <= 600
        assert timer.remaining_seconds == remaining

    @pytest.mark.asyncio
    async def test_stopped_before_start_never_ticks(self) -> None:
        on_expire = ExpiryRecorder()
        timer = LeaseTimer(on_expire=on_expire, window_seconds=1, tick_interval=0.001)
        timer.stop()

        with anyio.fail_after(5):
            await timer.run()

        assert on_expire.calls == 0
        assert timer.remaining_seconds == 1
