"""Application settings."""

import os
from datetime import tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic import BaseModel


class AppSettings(BaseModel):
    """Application settings loaded from environment variables."""

    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    # IANA zone used to bucket reviews into calendar days; empty means host local time.
    review_timezone: str = ""
    # "development" adds the raw exception text to 500 responses.
    app_env: str = "production"

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"

    @property
    def review_tz(self) -> tzinfo | None:
        return ZoneInfo(self.review_timezone) if self.review_timezone else None


@lru_cache()
def get_app_settings() -> AppSettings:
    """Get cached application settings from environment variables."""
    cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
    return AppSettings(
        cors_origins=[origin.strip() for origin in cors_origins.split(",") if origin.strip()],
        review_timezone=os.getenv("REVIEW_TIMEZONE", ""),
        app_env=os.getenv("APP_ENV", "production"),
    )
