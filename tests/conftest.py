"""
Pytest fixtures for the mapstruct test suite.

Shared record types live in ``tests/records.py``.
"""

from typing import Any

import pytest

from mapstruct.logging_config import LogContext, reset_logging
from tests.records import BasicArgs


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def basic_args() -> BasicArgs:
    return BasicArgs()


@pytest.fixture
def basic_values() -> dict[str, Any]:
    return {
        "id": 1001,
        "name": "tom",
        "ok": True,
        "price": 29.9,
        "ignore": "never mind",
        "NoName": "hello",
        "NotFound": "never mind",
    }


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()

