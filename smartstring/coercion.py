"""
Conversions between wrapped values, raw scalars, floats and strings.

coerce_float() is the single answer to "can I do math with this?"; every
arithmetic step runs both of its operands through it.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

from .classify import is_number, is_numeric
from .core.errors import InvalidValueError

SCALAR_TYPES = (str, int, float, bool, type(None))

# Leading numeric prefix used by the loose int/float conversions ("12abc" -> 12)
_LEADING_NUMBER = re.compile(r"^[ \t\n\r\v\f]*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES)


def is_wrapper(value: Any) -> bool:
    """True for SmartString instances."""
    # Import here to avoid circular import
    from .smart_string import SmartString

    return isinstance(value, SmartString)


def unwrap(value: Any) -> Any:
    """
    Return the raw scalar behind a value.

    SmartString instances yield their raw value, scalars pass through
    unchanged, anything else is rejected.

    Raises:
        InvalidValueError: If value is neither a SmartString nor a scalar
    """
    if is_wrapper(value):
        return value.value()
    if is_scalar(value):
        return value
    raise InvalidValueError(value)


def get_raw_value(value: Any) -> Any:
    """
    Like unwrap(), but also unwraps lists, tuples and dicts element-wise.

    Examples:
        >>> get_raw_value(SmartString("a"))
        'a'
        >>> get_raw_value({"a": SmartString(1), "b": [SmartString(None), 2]})
        {'a': 1, 'b': [None, 2]}
    """
    if isinstance(value, dict):
        return {key: get_raw_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [get_raw_value(item) for item in value]
    return unwrap(value)


def coerce_float(value: Any, null_as_zero: bool = False) -> Optional[float]:
    """
    Convert a raw or wrapped value to a float for arithmetic.

    Args:
        value: Raw scalar or SmartString
        null_as_zero: Treat None as 0.0 instead of a coercion failure

    Returns:
        The float value, or None when the value cannot take part in math.
        Non-numeric strings always fail, whatever null_as_zero says.

    Examples:
        >>> coerce_float("2.5")
        2.5
        >>> coerce_float(None, null_as_zero=True)
        0.0
        >>> coerce_float("abc", null_as_zero=True) is None
        True
    """
    raw = unwrap(value)

    if isinstance(raw, float):
        return raw
    if is_numeric(raw):
        return float(raw)
    if raw is None and null_as_zero:
        return 0.0
    return None


def to_string(value: Any) -> str:
    """
    String form of a raw scalar as it appears in rendered output.

    None and False render as "", True as "1", integral floats without a
    trailing ".0".
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    return str(value)


def to_float(value: Any) -> float:
    """Loose float conversion: unparseable values become 0.0."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if match:
            return float(match.group(0))
    return 0.0


def to_int(value: Any) -> int:
    """Loose int conversion, truncating toward zero; unparseable values become 0."""
    if isinstance(value, int):
        return int(value)
    number = to_float(value)
    if not math.isfinite(number):
        return 0
    return int(number)


def to_bool(value: Any) -> bool:
    """Loose truthiness: None, False, 0, 0.0, "" and "0" are False."""
    if isinstance(value, str):
        return value not in ("", "0")
    return bool(value)
