# backend/studio_admin/services/opening_hours/workflow.py
"""
Save an opening hours change: validate → detect conflicts → commit.

Nothing is written unless the week is valid and either no session
conflicts or the operator acknowledged the conflicts. Validation and
detection are read-only, so an abandoned sequence leaves no trace.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from redis import Redis
from sqlalchemy.orm import Session

from ...models.generated import StudioSettings
from ...schemas.opening_hours import SessionConflict, WeekHours
from .config import OPENING_HOURS_KEY
from .conflicts import detect_conflicts
from .invalidator import invalidate_opening_hours_cache
from .store import SettingsVersionStore
from .validation import has_validation_errors, normalize_week_hours, validate_opening_hours

logger = logging.getLogger(__name__)


@dataclass
class SaveOutcome:
    errors: dict[str, str] = field(default_factory=dict)
    conflicts: list[SessionConflict] = field(default_factory=list)
    setting: Optional[StudioSettings] = None

    @property
    def saved(self) -> bool:
        return self.setting is not None


def save_opening_hours(
    db: Session,
    hours: WeekHours,
    effective_date: Optional[date],
    tz: ZoneInfo,
    created_by: Optional[str] = None,
    acknowledge_conflicts: bool = False,
    redis: Redis | None = None,
) -> SaveOutcome:
    """
    Validate, check bookings and store a new opening hours version.

    Args:
        effective_date: First local date of the new hours; None = immediately
            (conflicts are then checked from today in tz)
        acknowledge_conflicts: Save even when sessions conflict

    Returns:
        SaveOutcome; outcome.saved tells whether a version was written.

    Raises:
        redis.exceptions.RedisError: cache unreachable. When raised before
            the commit nothing is stored; when raised after it the version
            is stored and only the cache clear failed.
    """
    errors = validate_opening_hours(hours)
    if has_validation_errors(errors):
        logger.info(f"Opening hours not saved: invalid days {sorted(errors)}")
        return SaveOutcome(errors=errors)

    check_from = effective_date or datetime.now(tz).date()
    conflicts = detect_conflicts(db, hours, check_from, tz)
    if conflicts and not acknowledge_conflicts:
        logger.info(f"Opening hours not saved: {len(conflicts)} unacknowledged conflict(s)")
        return SaveOutcome(conflicts=conflicts)

    # Also cleared before the commit: an unreachable Redis fails with nothing stored
    invalidate_opening_hours_cache(redis)

    store = SettingsVersionStore(db)
    setting = store.save(
        OPENING_HOURS_KEY,
        normalize_week_hours(hours).model_dump(),
        effective_date,
        created_by=created_by,
    )
    invalidate_opening_hours_cache(redis)

    return SaveOutcome(conflicts=conflicts, setting=setting)
