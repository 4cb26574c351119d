"""
Shared pytest fixtures for the smartstring tests.

This module provides:
- Isolation of the process-wide default Context between tests
- A fixed-UTC context for date tests
- A factory for SmartStrings bound to a custom context
"""

from typing import Any

import pytest

from smartstring import Context, SmartString, reset_context


@pytest.fixture(autouse=True)
def _isolated_default_context():
    """Every test starts and ends with a default context rebuilt from settings."""
    reset_context()
    yield
    reset_context()


@pytest.fixture
def utc_context() -> Context:
    """Context pinned to UTC so timestamp formatting is host-independent."""
    return Context(timezone="UTC")


@pytest.fixture
def smart_string_factory():
    """Factory for SmartStrings that share one context."""
    def _factory(value: Any = None, **context_fields: Any) -> SmartString:
        return SmartString(value, context=Context(**context_fields))
    return _factory
