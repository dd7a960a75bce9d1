"""
Runtime settings read from environment variables.

Handles:
- Activation base year for the yearly palace rotation
- Destiny compass age range
- Output directory for saved charts
- CLI logging level
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    activation_base_year: int = 2025
    compass_start_age: int = 18
    compass_end_age: int = 100
    chart_dir: str = "chart_data"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ZWDS_* environment variables, falling back to defaults."""
        settings = cls(
            activation_base_year=_int_env("ZWDS_ACTIVATION_BASE_YEAR", cls.activation_base_year),
            compass_start_age=_int_env("ZWDS_COMPASS_START_AGE", cls.compass_start_age),
            compass_end_age=_int_env("ZWDS_COMPASS_END_AGE", cls.compass_end_age),
            chart_dir=os.getenv("ZWDS_CHART_DIR", cls.chart_dir),
            log_level=os.getenv("ZWDS_LOG_LEVEL", cls.log_level).upper(),
        )
        if settings.compass_start_age > settings.compass_end_age:
            raise ValueError(
                f"ZWDS_COMPASS_START_AGE ({settings.compass_start_age}) is after "
                f"ZWDS_COMPASS_END_AGE ({settings.compass_end_age})"
            )
        return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings. Call get_settings.cache_clear() after changing the environment."""
    settings = Settings.from_env()
    logger.debug("Loaded settings: %s", settings)
    return settings


def configure_logging(level: Optional[str] = None) -> None:
    """Install a basic stderr handler. Only entry points call this."""
    level = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
