"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings so that an application can turn on fault logging
without touching code:

    TRYLINE_LOG_LEVEL=DEBUG
    TRYLINE_LOG_CAPTURED_FAULTS=true

configure() is the single registration point for process-wide state.
Call it once at startup; the library itself never configures anything on
import, so a process that never calls it keeps the no-op diagnostic hook.
"""

from __future__ import annotations

import logging

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tryline import diagnostics


class TrySettings(BaseSettings):
    """
    Process-wide settings for tryline.

    Load order (highest priority first):
      1. Environment variables (TRYLINE_ prefix)
      2. .env file in the working directory
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="TRYLINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="structlog filtering level")
    log_captured_faults: bool = Field(
        default=False,
        description="Install the logging diagnostic hook for every captured fault",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Reject names the logging module does not know."""
        level = value.strip().upper()
        if not isinstance(logging.getLevelNamesMapping().get(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


def configure(settings: TrySettings | None = None) -> TrySettings:
    """
    Apply settings: configure structlog and register the diagnostic hook.

    Returns the settings that were applied (loaded from the environment
    when none are given).
    """
    settings = settings or TrySettings()
    diagnostics.configure_structlog(settings.log_level)
    if settings.log_captured_faults:
        diagnostics.set_error_hook(diagnostics.logging_hook)

    structlog.get_logger().debug(
        "tryline.configured",
        log_level=settings.log_level,
        log_captured_faults=settings.log_captured_faults,
    )
    return settings
