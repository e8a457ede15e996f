"""Repeating countdown refresh for a single zone."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from zone_timings.domain.cooldown import ZoneStatus, zone_status


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class CountdownTicker:
    """Recompute a zone's cooldown status on a fixed cadence.

    Each tick re-derives the status from the fixed claim instant and the
    clock; the ticker holds no domain state of its own.
    """

    last_claimed_at: datetime
    on_tick: Callable[[ZoneStatus], None]
    interval: float = 1.0
    clock: Callable[[], datetime] = _utcnow
    _task: asyncio.Task | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> ZoneStatus:
        """Compute the current status and hand it to the callback."""
        status = zone_status(self.last_claimed_at, self.clock())
        self.on_tick(status)
        return status

    def start(self) -> None:
        """Emit one tick immediately, then one per interval."""
        if self.running:
            return
        self.tick()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        """Cancel the repeating task."""
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.tick()
