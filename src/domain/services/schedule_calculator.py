"""Next-execution computation for indicator schedulers.

Interval schedules run on "whole time" boundaries so indicators fire at clean
wall-clock times (xx:00, xx:05, ... for 5 minutes; 00:00, 06:00, ... for 6
hours). Cron schedules are evaluated with APScheduler's CronTrigger.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from apscheduler.triggers.cron import CronTrigger

MINUTES_PER_DAY = 1440

_NAMED_INTERVALS: dict[int, str] = {
    1: "Every minute at xx:00 seconds",
    5: "Every 5 minutes (xx:00, xx:05, xx:10, xx:15, etc.)",
    10: "Every 10 minutes (xx:00, xx:10, xx:20, xx:30, etc.)",
    15: "Every 15 minutes (xx:00, xx:15, xx:30, xx:45)",
    30: "Every 30 minutes (xx:00, xx:30)",
    60: "Every hour at xx:00",
    120: "Every 2 hours (00:00, 02:00, 04:00, etc.)",
    180: "Every 3 hours (00:00, 03:00, 06:00, etc.)",
    240: "Every 4 hours (00:00, 04:00, 08:00, etc.)",
    360: "Every 6 hours (00:00, 06:00, 12:00, 18:00)",
    720: "Every 12 hours (00:00, 12:00)",
    1440: "Daily at 00:00",
}


def ensure_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime (naive values are assumed UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_whole_time_execution(
    frequency_minutes: int, from_time: datetime | None = None
) -> datetime:
    """Compute the next whole-time boundary strictly after from_time.

    Boundaries are counted in minutes since midnight UTC, so every interval
    that divides a day (1, 5, 15, 60, 360, 1440, ...) lands on clean times.
    Intervals that do not divide a day restart at the next midnight.

    Args:
        frequency_minutes: Interval length in minutes (must be positive)
        from_time: Base time (defaults to now UTC)

    Returns:
        Next boundary as an aware UTC datetime

    Raises:
        ValueError: If frequency_minutes is not positive

    Example:
        10:07:30 with 5 minutes -> 10:10:00; 23:50 with 45 minutes -> 00:00 next day
    """
    if frequency_minutes <= 0:
        raise ValueError(
            f"frequency_minutes must be positive, got {frequency_minutes}"
        )

    base = ensure_utc(from_time or datetime.now(timezone.utc))
    midnight = base.replace(hour=0, minute=0, second=0, microsecond=0)
    minutes_since_midnight = int((base - midnight).total_seconds() // 60)
    next_minutes = (minutes_since_midnight // frequency_minutes + 1) * frequency_minutes

    if next_minutes >= MINUTES_PER_DAY:
        return midnight + timedelta(days=1)
    return midnight + timedelta(minutes=next_minutes)


def is_due_for_whole_time_execution(
    last_run: datetime | None,
    frequency_minutes: int,
    current_time: datetime | None = None,
) -> bool:
    """True if the boundary following last_run has been reached (never run = due)."""
    if last_run is None:
        return True
    now = ensure_utc(current_time or datetime.now(timezone.utc))
    return now >= next_whole_time_execution(frequency_minutes, last_run)


def describe_interval(frequency_minutes: int) -> str:
    """Human-readable description of a whole-time interval schedule."""
    if frequency_minutes in _NAMED_INTERVALS:
        return _NAMED_INTERVALS[frequency_minutes]
    if frequency_minutes < 60:
        return f"Every {frequency_minutes} minutes at whole minute boundaries"
    if frequency_minutes % 60 == 0:
        return f"Every {frequency_minutes // 60} hours at hour boundaries"
    return f"Every {frequency_minutes} minutes at calculated boundaries"


def resolve_timezone(tz: str) -> ZoneInfo:
    """Look up an IANA timezone name.

    Raises:
        ValueError: If the name is empty or unknown
    """
    if not tz or not tz.strip():
        raise ValueError("Timezone cannot be empty")
    try:
        return ZoneInfo(tz.strip())
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Invalid timezone: {tz}") from e


def build_cron_trigger(expression: str, tz: str = "UTC") -> CronTrigger:
    """Parse a five-field crontab expression.

    Raises:
        ValueError: If the expression is malformed or the timezone is unknown
    """
    if not expression or not expression.strip():
        raise ValueError("Cron expression cannot be empty")
    resolve_timezone(tz)
    try:
        return CronTrigger.from_crontab(expression.strip(), timezone=tz.strip())
    except KeyError as e:
        # Timezone lookup failures inside APScheduler surface as KeyError subclasses
        raise ValueError(f"Invalid timezone: {tz}") from e


def next_cron_execution(
    expression: str, after: datetime, tz: str = "UTC"
) -> datetime | None:
    """Next cron fire time strictly after the given instant, in UTC."""
    trigger = build_cron_trigger(expression, tz)
    # CronTrigger returns fire times >= now; nudge past an exact match
    reference = ensure_utc(after) + timedelta(microseconds=1)
    fire_time = trigger.get_next_fire_time(None, reference)
    if fire_time is None:
        return None
    return ensure_utc(fire_time)
