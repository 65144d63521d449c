import logging

import pytest
import structlog

from budget_tracker.config import get_settings


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    """Keep LEDGER_* variables and logging setup from leaking between tests."""
    for key in ("LEDGER_CURRENCY_LABEL", "LEDGER_HISTORY_CAPACITY", "LEDGER_LOG_LEVEL", "LEDGER_JSON_LOGS"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
