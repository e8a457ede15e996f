"""Tests for the countdown ticker."""

import asyncio
from datetime import UTC, datetime, timedelta

from zone_timings.domain.cooldown import ZoneStatus
from zone_timings.services.countdown import CountdownTicker

CLAIMED = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class SteppingClock:
    """Clock that advances one second per reading."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


def test_tick_recomputes_from_claim_and_clock() -> None:
    seen: list[ZoneStatus] = []
    clock = SteppingClock(CLAIMED + timedelta(hours=11, minutes=59, seconds=58))
    ticker = CountdownTicker(CLAIMED, seen.append, clock=clock)

    ticker.tick()
    ticker.tick()
    ticker.tick()

    assert [status.remaining_display for status in seen] == [
        "00:00:02",
        "00:00:01",
        "00:00:00",
    ]
    assert [status.is_expired for status in seen] == [False, False, False]
    assert ticker.last_claimed_at == CLAIMED


def test_start_emits_immediately_and_repeats_until_stopped() -> None:
    seen: list[ZoneStatus] = []

    async def scenario() -> None:
        ticker = CountdownTicker(
            CLAIMED, seen.append, interval=0.01, clock=SteppingClock(CLAIMED)
        )
        ticker.start()
        assert len(seen) == 1
        await asyncio.sleep(0.05)
        ticker.stop()
        assert ticker.running is False
        count = len(seen)
        await asyncio.sleep(0.03)
        assert len(seen) == count

    asyncio.run(scenario())

    assert len(seen) >= 2
    assert seen[0].remaining_display == "12:00:00"
    assert seen[1].remaining_display == "11:59:59"


def test_start_twice_keeps_single_task() -> None:
    seen: list[ZoneStatus] = []

    async def scenario() -> None:
        ticker = CountdownTicker(CLAIMED, seen.append, interval=10)
        ticker.start()
        ticker.start()
        assert ticker.running is True
        ticker.stop()

    asyncio.run(scenario())

    assert len(seen) == 1
