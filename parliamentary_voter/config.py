"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def normalize_log_level(value: str | None) -> str | None:
    """Upper-case a level name; blank means unset, unknown names are rejected."""
    if value is None or not value.strip():
        return None
    level = value.strip().upper()
    if level not in _LOG_LEVELS:
        msg = f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}"
        raise ValueError(msg)
    return level


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Project (constants, not from env)
    PROJECT_NAME: str = "Parliamentary Voter"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # Logging, derived from ENVIRONMENT unless set
    LOG_LEVEL: str | None = None

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def validate_log_level(cls, value: str | None) -> str | None:
        """Accept any case, reject unknown level names."""
        return normalize_log_level(value)


def configure_logging(environment: str = "development", level: str | None = None) -> None:
    """
    Configure structured logging with structlog.

    Args:
        environment: "production" selects JSON output, anything else console output
        level: Level name in any case; defaults to DEBUG in development, INFO otherwise

    Raises:
        ValueError: If level is not a known level name
    """
    # Determine if we should use JSON output (production) or console output (dev)
    use_json = environment == "production"

    level = normalize_log_level(level)
    if level is None:
        level = "DEBUG" if environment == "development" else "INFO"

    # Configure stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level),
    )

    # Configure structlog
    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        # Production: JSON output
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Development: Console output with colors
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from ENVIRONMENT and LOG_LEVEL (the cached settings by default)."""
    settings = settings or get_settings()
    configure_logging(settings.ENVIRONMENT, settings.LOG_LEVEL)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
