"""
Configuration Management for Budget Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

All tunables live here: the currency label printed next to amounts,
the optional cap on transaction history, and logging output.
"""

from enum import Enum
from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Level names accepted for structured logs."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LedgerSettings(BaseSettings):
    """
    Ledger and front-end settings.

    Loads configuration from LEDGER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    currency_label: str = Field(
        default="Rs",
        min_length=1,
        max_length=10,
        description="Label printed before every amount"
    )
    history_capacity: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum number of transactions kept (unbounded if unset)"
    )

    # Logging. Unset means the audit trail is not written to the terminal.
    log_level: Optional[LogLevel] = Field(
        default=None,
        description="Minimum level for structured logs (silent if unset)"
    )
    json_logs: bool = Field(
        default=False,
        description="Render logs as JSON instead of console lines"
    )

    @field_validator('log_level', mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        """Normalize and check the level name."""
        if v is None or isinstance(v, LogLevel):
            return v
        level = str(v).strip().upper()
        if not level:
            return None
        allowed = [member.value for member in LogLevel]
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return level


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
