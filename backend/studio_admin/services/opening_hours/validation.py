# backend/studio_admin/services/opening_hours/validation.py
"""
Opening hours validation.

Checked per open day:
✓ both times present
✓ both times "HH:MM" (24h, zero-padded)
✓ close_time strictly after open_time (same day)

Not checked:
✗ closed days (their time fields are ignored)
✗ overnight spans (never valid)
"""

import re

from ...schemas.opening_hours import WeekHours
from .config import WEEKDAYS

TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)

MSG_TIMES_REQUIRED = "Opening and closing times are required"
MSG_INVALID_FORMAT = "Invalid time format (expected HH:MM)"
MSG_CLOSE_BEFORE_OPEN = "Closing time must be after opening time"


def validate_opening_hours(week: WeekHours) -> dict[str, str]:
    """
    Validate a week of opening hours.

    Returns:
        Mapping weekday -> error message. Empty mapping = valid.
    """
    errors: dict[str, str] = {}

    for day in WEEKDAYS:
        hours = getattr(week, day)
        if not hours.is_open:
            continue

        if not hours.open_time or not hours.close_time:
            errors[day] = MSG_TIMES_REQUIRED
            continue

        if not TIME_PATTERN.fullmatch(hours.open_time) or not TIME_PATTERN.fullmatch(hours.close_time):
            errors[day] = MSG_INVALID_FORMAT
            continue

        # Zero-padded fixed width, so string order is time order
        if hours.close_time <= hours.open_time:
            errors[day] = MSG_CLOSE_BEFORE_OPEN

    return errors


def has_validation_errors(errors: dict[str, str]) -> bool:
    return len(errors) > 0


def normalize_week_hours(week: WeekHours) -> WeekHours:
    """Return a copy with the times of closed days cleared."""
    updates = {
        day: getattr(week, day).model_copy(update={"open_time": None, "close_time": None})
        for day in WEEKDAYS
        if not getattr(week, day).is_open
    }
    return week.model_copy(update=updates)
