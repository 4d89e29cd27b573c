# backend/studio_admin/services/opening_hours/config.py
"""
Opening hours configuration and shared time helpers.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo


OPENING_HOURS_KEY = "opening_hours"

WEEKDAYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)  # index == date.weekday()

DEFAULT_OPENING_HOURS: dict[str, dict] = {
    "monday": {"is_open": True, "open_time": "09:00", "close_time": "21:00"},
    "tuesday": {"is_open": True, "open_time": "09:00", "close_time": "21:00"},
    "wednesday": {"is_open": True, "open_time": "09:00", "close_time": "21:00"},
    "thursday": {"is_open": True, "open_time": "09:00", "close_time": "21:00"},
    "friday": {"is_open": True, "open_time": "09:00", "close_time": "21:00"},
    "saturday": {"is_open": True, "open_time": "10:00", "close_time": "18:00"},
    "sunday": {"is_open": False, "open_time": None, "close_time": None},
}


@dataclass(frozen=True)
class HoursConfig:
    """
    Configuration for opening hours capacity and caching.

    Attributes:
        slot_step_minutes: Length of one bookable slot (15/30/60)
        cache_ttl_seconds: Redis TTL for resolved opening hours per date
    """
    slot_step_minutes: int = 30
    cache_ttl_seconds: int = 86400  # 24 hours

    def __post_init__(self):
        if self.slot_step_minutes not in (15, 30, 60):
            raise ValueError(f"slot_step_minutes must be 15, 30, or 60, got {self.slot_step_minutes}")


@lru_cache
def get_hours_config() -> HoursConfig:
    """Get opening hours configuration (singleton, read from settings)."""
    from ...config import settings
    return HoursConfig(
        slot_step_minutes=settings.slot_step_minutes,
        cache_ttl_seconds=settings.opening_hours_cache_ttl_seconds,
    )


# ── Time helpers ─────────────────────────────────────────────────────────


def time_str_to_minutes(value: str) -> int:
    """Convert "HH:MM" to minutes since midnight. Raises ValueError."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def weekday_key(target_date: date) -> str:
    return WEEKDAYS[target_date.weekday()]


def to_db_timestamp(dt: datetime) -> str:
    """
    Format an aware datetime for storage: UTC, second precision,
    "YYYY-MM-DDTHH:MM:SS+00:00". Fixed width keeps text order == time order.
    """
    if dt.tzinfo is None:
        raise ValueError("naive datetime cannot be stored as an instant")
    return dt.astimezone(timezone.utc).replace(microsecond=0).isoformat()


def parse_db_timestamp(value: str | datetime) -> datetime:
    """Parse a stored timestamp; naive values are taken as UTC."""
    dt = datetime.fromisoformat(value) if isinstance(value, str) else value
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def local_day_start(target_date: date, tz: ZoneInfo) -> datetime:
    """Midnight of a local calendar date, as an aware datetime."""
    return datetime.combine(target_date, time.min, tzinfo=tz)
