"""Configuration package."""

from budget_tracker.config.settings import LedgerSettings, LogLevel, get_settings

__all__ = [
    "LedgerSettings",
    "LogLevel",
    "get_settings",
]
