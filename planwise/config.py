"""Configuration for planwise.

Settings come from environment variables, optionally loaded from a `.env`
file in the working directory.
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from planwise.models.constants import (
    DEFAULT_ENERGY_LEVEL,
    DEFAULT_SUGGESTION_LIMIT,
    DEFAULT_WEEK_STARTS_ON,
)
from planwise.models.working_hours import WorkingHours

logger = logging.getLogger(__name__)

load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


@dataclass(frozen=True)
class Settings:
    """Runtime settings (all values have defaults)."""

    week_starts_on: int = DEFAULT_WEEK_STARTS_ON
    working_hours: Optional[WorkingHours] = None
    energy_level: int = DEFAULT_ENERGY_LEVEL
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT
    timezone: Optional[str] = None
    stale_overdue_days: Optional[int] = None
    log_level: str = "INFO"
    debug: bool = False

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        return ZoneInfo(self.timezone) if self.timezone else None


def load_settings() -> Settings:
    """Read settings from the environment.

    Raises:
        ValueError: If a variable is present but malformed
    """
    working_hours_raw = os.getenv("PLANWISE_WORKING_HOURS", "").strip()
    settings = Settings(
        week_starts_on=int(os.getenv("PLANWISE_WEEK_STARTS_ON", str(DEFAULT_WEEK_STARTS_ON))),
        working_hours=WorkingHours.parse(working_hours_raw) if working_hours_raw else None,
        energy_level=int(os.getenv("PLANWISE_ENERGY_LEVEL", str(DEFAULT_ENERGY_LEVEL))),
        suggestion_limit=int(os.getenv("PLANWISE_SUGGESTION_LIMIT", str(DEFAULT_SUGGESTION_LIMIT))),
        timezone=os.getenv("PLANWISE_TIMEZONE") or None,
        stale_overdue_days=_optional_int("PLANWISE_STALE_OVERDUE_DAYS"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        debug=os.getenv("DEBUG", "False").lower() == "true",
    )
    if not 0 <= settings.week_starts_on <= 6:
        raise ValueError("PLANWISE_WEEK_STARTS_ON must be between 0 and 6")
    if not 0 <= settings.energy_level <= 100:
        raise ValueError("PLANWISE_ENERGY_LEVEL must be between 0 and 100")
    if settings.timezone:
        # Fail at startup rather than on the first request.
        try:
            ZoneInfo(settings.timezone)
        except ZoneInfoNotFoundError:
            raise ValueError(f"PLANWISE_TIMEZONE {settings.timezone!r} is not a known timezone")
    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings instance (tests call `get_settings.cache_clear()`)."""
    return load_settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug(f"Logging configured at {logging.getLevelName(level)}")
