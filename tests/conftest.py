"""
Shared test fixtures for the outcomes test suite.

Provides call counters for non-invocation checks and keeps settings and
structlog configuration isolated between tests.
"""

from __future__ import annotations

from typing import Any

import pytest
import structlog

from outcomes.config import get_settings


class CallCounter:
    """Callable that records how many times (and with what) it was invoked."""

    def __init__(self, returns: Any = None) -> None:
        self.returns = returns
        self.calls: list[tuple[Any, ...]] = []

    @property
    def count(self) -> int:
        return len(self.calls)

    def __call__(self, *args: Any) -> Any:
        self.calls.append(args)
        return self.returns


@pytest.fixture()
def counter() -> CallCounter:
    """A counter returning None."""
    return CallCounter()


@pytest.fixture(autouse=True)
def _isolated_settings():
    """Settings are re-read from the (monkeypatched) environment in every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _isolated_structlog():
    yield
    structlog.reset_defaults()
