# backend/studio_admin/services/opening_hours/store.py
"""
Time-versioned settings store.

Every settings key owns a timeline of rows in studio_settings, one per
effective_from date (NULL = effective immediately, its own slot).

- active(key, D):    is_active row with the greatest effective_from <= D;
                     NULL ranks before every date.
- scheduled(key, D): is_active row with the smallest effective_from > D.
- save(key, v, E):   upsert on (key, E); other dates are left untouched.

Dates are the caller's local calendar dates (datetime.date), compared as
"YYYY-MM-DD" text. Persistence errors are rolled back and re-raised as is.
"""

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

from redis import Redis
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models.generated import StudioSettings
from ...schemas.opening_hours import WeekHours
from .config import DEFAULT_OPENING_HOURS, OPENING_HOURS_KEY
from .redis_store import MISS, OpeningHoursRedisStore

logger = logging.getLogger(__name__)


class SettingsVersionStore:
    """Keyed, date-versioned settings over a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    # ── Read ─────────────────────────────────────────────────────────────

    def active(self, key: str, reference_date: date) -> Optional[StudioSettings]:
        ref = reference_date.isoformat()
        return (
            self.db.query(StudioSettings)
            .filter(
                StudioSettings.setting_key == key,
                StudioSettings.is_active == 1,
                or_(
                    StudioSettings.effective_from.is_(None),
                    StudioSettings.effective_from <= ref,
                ),
            )
            .order_by(StudioSettings.effective_from.desc().nulls_last())
            .first()
        )

    def scheduled(self, key: str, reference_date: date) -> Optional[StudioSettings]:
        ref = reference_date.isoformat()
        return (
            self.db.query(StudioSettings)
            .filter(
                StudioSettings.setting_key == key,
                StudioSettings.is_active == 1,
                StudioSettings.effective_from.is_not(None),
                StudioSettings.effective_from > ref,
            )
            .order_by(StudioSettings.effective_from.asc())
            .first()
        )

    def history(self, key: str) -> list[StudioSettings]:
        """All versions of a key, NULL effective_from first, then by date."""
        return (
            self.db.query(StudioSettings)
            .filter(StudioSettings.setting_key == key)
            .order_by(
                StudioSettings.effective_from.asc().nulls_first(),
                StudioSettings.id.asc(),
            )
            .all()
        )

    # ── Write ────────────────────────────────────────────────────────────

    def save(
        self,
        key: str,
        value: Any,
        effective_from: Optional[date],
        created_by: Optional[str] = None,
    ) -> StudioSettings:
        """
        Upsert the version of key that starts on effective_from.

        Returns:
            The stored row (refreshed).
        """
        effective = effective_from.isoformat() if effective_from else None
        payload = json.dumps(value)
        now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        try:
            obj = self._find_version(key, effective)
            if obj:
                obj.setting_value = payload
                obj.created_by = created_by
                obj.is_active = 1
                obj.updated_at = now
            else:
                obj = StudioSettings(
                    setting_key=key,
                    setting_value=payload,
                    effective_from=effective,
                    is_active=1,
                    created_by=created_by,
                    created_at=now,
                    updated_at=now,
                )
                self.db.add(obj)

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        self.db.refresh(obj)
        logger.info(
            f"Saved setting {key} effective_from={effective or 'immediate'} id={obj.id}"
        )
        return obj

    # ── Helpers ──────────────────────────────────────────────────────────

    def _find_version(self, key: str, effective: Optional[str]) -> Optional[StudioSettings]:
        query = self.db.query(StudioSettings).filter(StudioSettings.setting_key == key)
        if effective is None:
            query = query.filter(StudioSettings.effective_from.is_(None))
        else:
            query = query.filter(StudioSettings.effective_from == effective)
        return query.first()


def decode_value(obj: StudioSettings) -> Any:
    return json.loads(obj.setting_value) if obj.setting_value else None


# ── Opening hours ────────────────────────────────────────────────────────


def resolve_opening_hours(
    db: Session,
    target_date: date,
    redis: Redis | None = None,
) -> WeekHours | None:
    """
    Opening hours in effect on target_date, or None when no version exists.
    Uses the Redis cache when a client is given.
    """
    cache = OpeningHoursRedisStore(redis) if redis is not None else None

    if cache is not None:
        cached = cache.get_day_hours(target_date)
        if cached is not MISS:
            return cached

    row = SettingsVersionStore(db).active(OPENING_HOURS_KEY, target_date)
    hours = WeekHours.model_validate(decode_value(row)) if row else None

    if cache is not None:
        cache.store_day_hours(target_date, hours)

    return hours


def get_opening_hours_for(
    db: Session,
    target_date: date,
    redis: Redis | None = None,
) -> WeekHours:
    """Like resolve_opening_hours, falling back to DEFAULT_OPENING_HOURS."""
    hours = resolve_opening_hours(db, target_date, redis)
    if hours is None:
        return WeekHours.model_validate(DEFAULT_OPENING_HOURS)
    return hours
