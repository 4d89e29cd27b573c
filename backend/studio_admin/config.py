# backend/studio_admin/config.py

from datetime import date, datetime
from functools import cached_property
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repository root


class Settings(BaseSettings):
    database_url: str
    studio_timezone: str
    redis_url: str | None = None

    slot_step_minutes: int = 30
    opening_hours_cache_ttl_seconds: int = 86400
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        extra="ignore",
    )

    @property
    def resolved_database_url(self) -> str:
        url = self.database_url
        if url.startswith("sqlite:///./"):
            # Relative SQLite paths are anchored at the repository root
            relative_path = url.replace("sqlite:///./", "")
            absolute_path = BASE_DIR / relative_path
            return f"sqlite:///{absolute_path}"
        return url

    @cached_property
    def studio_tz(self) -> ZoneInfo:
        """Timezone used for weekdays and local times of day."""
        return ZoneInfo(self.studio_timezone)

    def studio_today(self) -> date:
        """Current calendar date in the studio timezone."""
        return datetime.now(self.studio_tz).date()


settings = Settings()
