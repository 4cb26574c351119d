"""
Conditional value replacement.

These work on raw values only: they never look at the numeric error state
of a chain. Fallbacks and replacement values are unwrapped first, so a
SmartString can be passed anywhere a scalar can.
"""

from __future__ import annotations

from typing import Any

from .classify import is_blank, is_missing, is_null, is_zero
from .coercion import is_wrapper, to_bool, to_string, unwrap


def or_(value: Any, fallback: Any) -> Any:
    """Use fallback when the value is missing (None or ""). Zero is kept."""
    return unwrap(fallback) if is_missing(value) else value


def and_(value: Any, suffix: Any) -> Any:
    """Append suffix to the string form of a value that is not missing."""
    if is_missing(value):
        return value
    return to_string(value) + to_string(unwrap(suffix))


def and_prefix(value: Any, prefix: Any) -> Any:
    """Prepend prefix to the string form of a value that is not missing."""
    if is_missing(value):
        return value
    return to_string(unwrap(prefix)) + to_string(value)


def if_blank(value: Any, fallback: Any) -> Any:
    return unwrap(fallback) if is_blank(value) else value


def if_null(value: Any, fallback: Any) -> Any:
    return unwrap(fallback) if is_null(value) else value


def if_zero(value: Any, fallback: Any) -> Any:
    return unwrap(fallback) if is_zero(value) else value


def if_(value: Any, condition: Any, value_if_true: Any) -> Any:
    """Adopt value_if_true when the unwrapped condition is loosely truthy ("0" is not)."""
    raw = condition.value() if is_wrapper(condition) else condition
    if to_bool(raw):
        return unwrap(value_if_true)
    return value


def set_(value: Any, new_value: Any) -> Any:
    """Unconditionally adopt new_value."""
    return unwrap(new_value)
