# backend/studio_admin/services/opening_hours/invalidator.py
"""
Cache invalidation for resolved opening hours.

Triggers:
✓ Any opening_hours version saved → invalidate all cached dates

Does NOT trigger:
✗ Training sessions created/cancelled (hours do not depend on bookings)
✗ Other settings keys
"""

import logging
from datetime import date
from redis import Redis

from .redis_store import OpeningHoursRedisStore

logger = logging.getLogger(__name__)


def invalidate_opening_hours_cache(
    redis: Redis | None,
    dates: list[date] | None = None,
) -> int:
    """
    Invalidate cached opening hours.

    Args:
        redis: Redis client, or None when caching is disabled
        dates: Specific dates to invalidate, or None for all cached dates

    Returns:
        Number of deleted cache keys
    """
    if redis is None:
        return 0

    store = OpeningHoursRedisStore(redis)
    deleted = store.delete_day_hours(dates)
    logger.info(f"Invalidated {deleted} cached opening hours day(s)")
    return deleted
