# backend/studio_admin/redis_client.py

from redis import Redis

from .config import settings

# None when no REDIS_URL is configured; callers fall back to the database.
redis_client: Redis | None = (
    Redis.from_url(settings.redis_url) if settings.redis_url else None
)
