"""Compose claim instants from admin form input."""

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from zone_timings.exceptions import ValidationError

HOURS_ON_CLOCK = 12
MAX_MINUTE = 59
MAX_SECOND = 59
PERIODS = ("AM", "PM")


def parse_time_of_day(raw: str) -> time:
    """Parse an `HH:MM` or `HH:MM:SS` 24-hour time string."""
    parts = raw.strip().split(":")
    if len(parts) not in {2, 3} or not all(part.isdigit() for part in parts):
        raise ValidationError(f"Invalid time of day: {raw!r}")
    values = [int(part) for part in parts]
    try:
        return time(*values)
    except ValueError as exc:
        raise ValidationError(f"Invalid time of day: {raw!r}") from exc


def compose_claim_instant(day: date, time_of_day: time, tz: ZoneInfo) -> datetime:
    """Combine a local date and time of day into an aware instant."""
    return datetime.combine(day, time_of_day, tzinfo=tz)


def to_24_hour(hour: int, period: str) -> int:
    """Convert a 12-hour clock reading to a 24-hour hour."""
    normalized = period.strip().upper()
    if normalized not in PERIODS:
        raise ValidationError(f"Period must be AM or PM, got {period!r}")
    if not 1 <= hour <= HOURS_ON_CLOCK:
        raise ValidationError(f"Hour must be between 1 and 12, got {hour}")
    if normalized == "AM":
        return 0 if hour == HOURS_ON_CLOCK else hour
    return hour if hour == HOURS_ON_CLOCK else hour + HOURS_ON_CLOCK


def compose_claim_today(  # noqa: PLR0913
    hour: int,
    minute: int,
    second: int,
    period: str,
    tz: ZoneInfo,
    now: datetime | None = None,
) -> datetime:
    """Build a claim instant for today's date at a 12-hour clock time.

    The date is always today in `tz`, even when the resulting instant lies in
    the future.
    """
    if not 0 <= minute <= MAX_MINUTE:
        raise ValidationError(f"Minute must be between 0 and 59, got {minute}")
    if not 0 <= second <= MAX_SECOND:
        raise ValidationError(f"Second must be between 0 and 59, got {second}")
    hour_24 = to_24_hour(hour, period)
    today = (now or datetime.now(tz=tz)).astimezone(tz).date()
    return compose_claim_instant(today, time(hour_24, minute, second), tz)
