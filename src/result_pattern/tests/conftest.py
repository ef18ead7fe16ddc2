"""Shared fixtures: fresh settings per test and captured log output."""

from __future__ import annotations

from io import StringIO
from typing import Iterator

import pytest

from result_pattern.config import clear_settings_cache
from result_pattern.errors import set_panic_payload
from result_pattern.logger import configure_logging


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Re-read RESULT_PATTERN_* variables in every test and restore payload reporting."""
    clear_settings_cache()
    yield
    clear_settings_cache()
    set_panic_payload(True)


@pytest.fixture
def log_output() -> Iterator[StringIO]:
    """Console logging at DEBUG into a buffer, without colors or timestamps noise."""
    buf = StringIO()
    configure_logging("console", "DEBUG", output=buf, colors=False)
    yield buf
    configure_logging("none")


@pytest.fixture
def json_log_output() -> Iterator[StringIO]:
    buf = StringIO()
    configure_logging("json", "DEBUG", output=buf)
    yield buf
    configure_logging("none")
