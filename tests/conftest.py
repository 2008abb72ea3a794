"""Shared test configuration and fixtures."""

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

import trade_journal.core.config as config_module
from trade_journal.core.calendar import JournalCalendar

_TEST_ENV_VARS = {
    "TRADE_JOURNAL_TIMEZONE": "UTC",
}


@pytest.fixture(autouse=True)
def _isolate_config() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Pin the journal time zone to UTC and reset the config singleton.

    The default ``settings.yaml`` reads the zone from the environment, so
    tests would otherwise depend on the machine's shell. The cached
    ``ConfigLoader`` is dropped before and after each test so patched
    variables take effect.
    """
    config_module._config = None  # noqa: SLF001
    with patch.dict(os.environ, _TEST_ENV_VARS):
        yield
    config_module._config = None  # noqa: SLF001


@pytest.fixture
def utc_calendar() -> JournalCalendar:
    """Return a journal calendar pinned to UTC."""
    return JournalCalendar("UTC")
