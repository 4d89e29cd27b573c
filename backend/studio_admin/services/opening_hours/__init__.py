# backend/studio_admin/services/opening_hours/__init__.py
"""
Opening hours module.

Validation and slot capacity are pure functions over WeekHours.
Versions live in studio_settings; conflicts are read from training_sessions.
"""

from .config import (
    DEFAULT_OPENING_HOURS,
    OPENING_HOURS_KEY,
    WEEKDAYS,
    HoursConfig,
    get_hours_config,
)
from .validation import validate_opening_hours, has_validation_errors, normalize_week_hours
from .calculator import slots_per_day, total_weekly_slots, calculate_day_slots
from .store import SettingsVersionStore, resolve_opening_hours, get_opening_hours_for
from .conflicts import detect_conflicts
from .invalidator import invalidate_opening_hours_cache
from .workflow import SaveOutcome, save_opening_hours

__all__ = [
    "DEFAULT_OPENING_HOURS",
    "OPENING_HOURS_KEY",
    "WEEKDAYS",
    "HoursConfig",
    "get_hours_config",
    "validate_opening_hours",
    "has_validation_errors",
    "normalize_week_hours",
    "slots_per_day",
    "total_weekly_slots",
    "calculate_day_slots",
    "SettingsVersionStore",
    "resolve_opening_hours",
    "get_opening_hours_for",
    "detect_conflicts",
    "invalidate_opening_hours_cache",
    "SaveOutcome",
    "save_opening_hours",
]
