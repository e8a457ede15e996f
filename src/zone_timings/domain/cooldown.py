"""Zone cooldown computation.

A zone is locked for twelve hours after its last claim. Everything here is a
pure function of the claim instant and the current instant.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

COOLDOWN = timedelta(hours=12)
ZERO_DISPLAY = "00:00:00"
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60


@dataclass(frozen=True)
class ZoneStatus:
    """Derived cooldown state for a single zone at one instant."""

    is_expired: bool
    expiration_time: datetime
    seconds_left: int
    remaining_display: str


def expiration_time(last_claimed_at: datetime) -> datetime:
    """Return the instant the cooldown ends."""
    return last_claimed_at + COOLDOWN


def is_expired(last_claimed_at: datetime, now: datetime) -> bool:
    """Return True once `now` is strictly past the expiration instant."""
    return now > expiration_time(last_claimed_at)


def seconds_left(last_claimed_at: datetime, now: datetime) -> int:
    """Return whole seconds until expiration, floored. May be negative."""
    remaining = expiration_time(last_claimed_at) - now
    return math.floor(remaining.total_seconds())


def format_remaining(seconds: int) -> str:
    """Render seconds as HH:MM:SS; hours are not capped at two digits."""
    if seconds <= 0:
        return ZERO_DISPLAY
    hours, rest = divmod(seconds, SECONDS_PER_HOUR)
    minutes, secs = divmod(rest, SECONDS_PER_MINUTE)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def zone_status(last_claimed_at: datetime, now: datetime) -> ZoneStatus:
    """Compute the full cooldown status for a claim instant."""
    left = seconds_left(last_claimed_at, now)
    return ZoneStatus(
        is_expired=is_expired(last_claimed_at, now),
        expiration_time=expiration_time(last_claimed_at),
        seconds_left=max(left, 0),
        remaining_display=format_remaining(left),
    )
