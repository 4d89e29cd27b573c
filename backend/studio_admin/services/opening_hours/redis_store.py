# backend/studio_admin/services/opening_hours/redis_store.py
"""
Redis cache for opening hours resolved per calendar date.

Key format: opening_hours:day:{date}
Value: JSON WeekHours in effect on that date.
Sentinel: "__none__" marks "resolved, no version exists".
"""

import json
from datetime import date
from redis import Redis

from ...schemas.opening_hours import WeekHours
from .config import HoursConfig, get_hours_config


NONE_SENTINEL = "__none__"
MISS = object()


class OpeningHoursRedisStore:
    """Redis storage wrapper for resolved opening hours."""

    KEY_PREFIX = "opening_hours:day"

    def __init__(self, redis: Redis, config: HoursConfig | None = None):
        self.redis = redis
        self.config = config or get_hours_config()

    def _key(self, dt: date) -> str:
        return f"{self.KEY_PREFIX}:{dt.isoformat()}"

    # ── Write ────────────────────────────────────────────────────────────

    def store_day_hours(self, dt: date, hours: WeekHours | None) -> None:
        """Cache the hours resolved for dt. None is cached as the sentinel."""
        payload = hours.model_dump_json() if hours is not None else NONE_SENTINEL
        self.redis.set(self._key(dt), payload, ex=self.config.cache_ttl_seconds)

    # ── Read ─────────────────────────────────────────────────────────────

    def get_day_hours(self, dt: date):
        """
        Get cached hours for dt.

        Returns:
            WeekHours, None when cached as "no version", or MISS.
        """
        raw = self.redis.get(self._key(dt))
        if raw is None:
            return MISS
        if isinstance(raw, bytes):
            raw = raw.decode()
        if raw == NONE_SENTINEL:
            return None
        return WeekHours.model_validate(json.loads(raw))

    # ── Delete ───────────────────────────────────────────────────────────

    def delete_day_hours(self, dates: list[date] | None = None) -> int:
        """
        Delete cached days.

        Args:
            dates: Specific dates, or None to delete every cached day.

        Returns:
            Number of deleted keys.
        """
        if dates:
            keys = [self._key(dt) for dt in dates]
        else:
            keys = self.redis.keys(f"{self.KEY_PREFIX}:*")

        if not keys:
            return 0

        return self.redis.delete(*keys)
