"""
Value classification predicates.

Four families answer "is there anything here?" in different ways and are
deliberately not interchangeable:

    =========  ===========================================================
    missing    None or ""                      (or_, and_, fail-fast ops)
    blank      exactly ""; None is not blank   (if_blank)
    zero       numeric-looking and == 0.0      (if_zero)
    empty      None, "", False, 0, 0.0, "0"    (is_empty / is_not_empty)
    =========  ===========================================================

All predicates take an already-unwrapped raw scalar and never raise.
"""

from __future__ import annotations

import math
import re
from typing import Any

# Optional sign, ASCII digits with optional fraction (or a bare fraction),
# optional exponent. Leading/trailing whitespace is tolerated; "1,234", "0x1A",
# "inf", "1_000" and non-ASCII digits such as "\u0661\u0662" are not numeric.
NUMERIC_STRING_PATTERN = re.compile(
    r"^[ \t\n\r\v\f]*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?[ \t\n\r\v\f]*$",
    re.ASCII,
)


def is_number(value: Any) -> bool:
    """True for int and float values; bool is not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_numeric(value: Any) -> bool:
    """
    Check if a value is numeric-looking.

    Examples:
        >>> is_numeric(12)
        True
        >>> is_numeric(" -1.5e3 ")
        True
        >>> is_numeric("1,234")
        False
        >>> is_numeric(True)
        False
    """
    if is_number(value):
        return True
    return isinstance(value, str) and NUMERIC_STRING_PATTERN.match(value) is not None


def is_null(value: Any) -> bool:
    return value is None


def is_missing(value: Any) -> bool:
    """None or the empty string. Zero and False are not missing."""
    return value is None or value == ""


def is_blank(value: Any) -> bool:
    """Exactly the empty string."""
    return isinstance(value, str) and value == ""


def is_zero(value: Any) -> bool:
    """Numeric-looking and equal to 0.0 ("0", "0.00", 0, -0.0)."""
    if not is_numeric(value):
        return False
    number = float(value)
    return not math.isnan(number) and number == 0.0


def is_empty(value: Any) -> bool:
    """
    Loose emptiness: None, "", False, 0, 0.0 and the string "0".

    Note "0.0" and " 0" are strings with content and are not empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == "" or value == "0"
    if is_number(value):
        return value == 0
    return False
