"""Centralized configuration for boottasks.

Settings are read from environment variables with the ``BOOTTASKS_`` prefix:

- ``BOOTTASKS_SWEEP_INTERVAL``: seconds to pause between sweeps (default 0.1)
- ``BOOTTASKS_MAX_SWEEPS``: give up after this many sweeps (default: never)
- ``BOOTTASKS_LOG_LEVEL``: level used by the command line (default INFO)

Usage:
    from boottasks.config import get_config

    config = get_config()
    print(config.sweep_interval)
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# --- Constants ---

DEFAULT_SWEEP_INTERVAL = 0.1
DEFAULT_LOG_LEVEL = "INFO"


class BootTasksSettings(BaseSettings):
    """Scheduler settings loaded from BOOTTASKS_* environment variables."""

    sweep_interval: float = Field(
        default=DEFAULT_SWEEP_INTERVAL,
        ge=0.0,
        description="Pause between two sweeps, in seconds.",
    )
    max_sweeps: int | None = Field(
        default=None,
        ge=1,
        description="Stop with an error after this many sweeps. None polls forever.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        description="Logging level name used by the command line.",
    )

    model_config = SettingsConfigDict(
        env_prefix="BOOTTASKS_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level {value!r}")
        return level


# --- Config loading ---


def load_config() -> BootTasksSettings:
    """Load configuration from the environment."""
    config = BootTasksSettings()
    logger.debug(
        f"Loaded config: sweep_interval={config.sweep_interval} "
        f"max_sweeps={config.max_sweeps} log_level={config.log_level}"
    )
    return config


@lru_cache(maxsize=1)
def get_config() -> BootTasksSettings:
    """Get the cached global configuration.

    Use clear_config_cache() to force a reload.
    """
    return load_config()


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing reload on next get_config()."""
    get_config.cache_clear()


# --- Config provider for dependency injection ---


class ConfigProvider:
    """Provider for BootTasksSettings that supports overriding.

    This allows tests and embedding programs to replace the config.
    """

    def __init__(self) -> None:
        self._override: BootTasksSettings | None = None

    def get(self) -> BootTasksSettings:
        """Get the current configuration."""
        if self._override is not None:
            return self._override
        return get_config()

    def set(self, config: BootTasksSettings) -> None:
        """Override the configuration."""
        self._override = config

    def reset(self) -> None:
        """Reset to default configuration loading."""
        self._override = None
        clear_config_cache()


config_provider = ConfigProvider()
