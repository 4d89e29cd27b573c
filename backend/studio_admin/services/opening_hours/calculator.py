# backend/studio_admin/services/opening_hours/calculator.py
"""
Slot capacity for a week of opening hours.

A slot is one fixed-length bookable unit (slot_step_minutes, 30 by default).
Per open day: floor((close - open) / step); remainders are dropped.

Precondition: the week has already passed validate_opening_hours().
Nothing here validates, and malformed input yields 0 slots instead of
raising.
"""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from ...schemas.opening_hours import DayHours, WeekHours
from .config import (
    HoursConfig,
    WEEKDAYS,
    get_hours_config,
    local_day_start,
    time_str_to_minutes,
    weekday_key,
)


def slots_per_day(
    week: WeekHours,
    config: HoursConfig | None = None,
) -> dict[str, int]:
    """Number of whole slots per weekday."""
    config = config or get_hours_config()
    return {
        day: _day_slot_count(getattr(week, day), config.slot_step_minutes)
        for day in WEEKDAYS
    }


def total_weekly_slots(
    week: WeekHours,
    config: HoursConfig | None = None,
) -> int:
    return sum(slots_per_day(week, config).values())


def calculate_day_slots(
    week: WeekHours,
    target_date: date,
    tz: ZoneInfo,
    config: HoursConfig | None = None,
) -> list[tuple[datetime, datetime]]:
    """
    Generate the slots of one calendar date.

    Slots falling in a spring-forward gap are skipped, so that date can
    have fewer slots than slots_per_day() reports for its weekday.

    Returns:
        List of (start, end) aware datetimes in tz. Empty list = closed.
    """
    config = config or get_hours_config()
    day = getattr(week, weekday_key(target_date))

    span = _open_span(day)
    if span is None:
        return []

    open_min, close_min = span
    step = config.slot_step_minutes
    day_start = local_day_start(target_date, tz)

    slots: list[tuple[datetime, datetime]] = []
    t = open_min
    while t + step <= close_min:
        # Wall-clock arithmetic, so DST days keep their local slot times
        start = day_start + timedelta(minutes=t)
        end = day_start + timedelta(minutes=t + step)
        # Starts inside a spring-forward gap never happen
        if _exists_locally(start):
            slots.append((start, end))
        t += step

    return slots


# ── Helpers ──────────────────────────────────────────────────────────────


def _day_slot_count(day: DayHours, step: int) -> int:
    span = _open_span(day)
    if span is None:
        return 0
    open_min, close_min = span
    return (close_min - open_min) // step


def _open_span(day: DayHours) -> tuple[int, int] | None:
    """(open, close) in minutes, or None when closed, incomplete or malformed."""
    if not day.is_open or not day.open_time or not day.close_time:
        return None
    try:
        open_min = time_str_to_minutes(day.open_time)
        close_min = time_str_to_minutes(day.close_time)
    except (ValueError, AttributeError):
        return None
    if close_min <= open_min:
        return None
    return open_min, close_min


def _exists_locally(dt: datetime) -> bool:
    """False for wall times skipped by a DST transition."""
    return dt.astimezone(timezone.utc).astimezone(dt.tzinfo) == dt
