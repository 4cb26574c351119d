"""Tests for unwrapping and loose type conversion."""

import math

import pytest

from smartstring import InvalidValueError, SmartString
from smartstring.coercion import (
    coerce_float,
    get_raw_value,
    is_wrapper,
    to_bool,
    to_float,
    to_int,
    to_string,
    unwrap,
)


class TestUnwrap:
    """Test unwrap and get_raw_value."""

    def test_unwrap_smart_string(self):
        """A SmartString yields its raw value."""
        assert unwrap(SmartString("abc")) == "abc"
        assert unwrap(SmartString(None)) is None

    def test_unwrap_scalar_passes_through(self):
        """Scalars come back unchanged."""
        for value in ("x", 1, 1.5, True, None):
            assert unwrap(value) is value

    def test_unwrap_rejects_containers(self):
        """Lists and dicts are not scalars."""
        with pytest.raises(InvalidValueError) as exc_info:
            unwrap([1, 2])
        assert exc_info.value.details == {"type": "list"}

    def test_get_raw_value_recurses(self):
        """Containers are unwrapped element-wise, tuples become lists."""
        data = {"a": SmartString(1), "b": [SmartString("x"), (SmartString(None), 2)]}
        assert get_raw_value(data) == {"a": 1, "b": ["x", [None, 2]]}

    def test_get_raw_value_rejects_objects(self):
        """Arbitrary objects are rejected."""
        with pytest.raises(InvalidValueError):
            get_raw_value(object())

    def test_is_wrapper(self):
        """is_wrapper recognises SmartString only."""
        assert is_wrapper(SmartString(1)) is True
        assert is_wrapper(1) is False


class TestCoerceFloat:
    """Test coercion for arithmetic."""

    def test_float_returned_directly(self):
        """Floats, including NaN, pass straight through."""
        assert coerce_float(2.5) == 2.5
        assert math.isnan(coerce_float(float("nan")))

    def test_numeric_strings_and_ints(self):
        """Numeric-looking values convert."""
        assert coerce_float("3") == 3.0
        assert coerce_float(" -1.5e1 ") == -15.0
        assert coerce_float(7) == 7.0

    def test_wrapped_value(self):
        """SmartString operands are unwrapped first."""
        assert coerce_float(SmartString("4.5")) == 4.5

    def test_null_policy(self):
        """None fails unless null_as_zero is on."""
        assert coerce_float(None) is None
        assert coerce_float(None, null_as_zero=True) == 0.0

    def test_non_numeric_always_fails(self):
        """Non-numeric strings fail regardless of the null policy."""
        assert coerce_float("abc", null_as_zero=True) is None
        assert coerce_float("", null_as_zero=True) is None
        assert coerce_float("1,234") is None

    def test_non_ascii_digits_fail(self):
        """Only ASCII digits count as numeric."""
        assert coerce_float("\u0661\u0662") is None
        assert coerce_float("\uff11\uff12", null_as_zero=True) is None

    def test_bool_is_not_numeric(self):
        """Booleans cannot take part in arithmetic."""
        assert coerce_float(True) is None


class TestConversions:
    """Test to_string, to_int, to_float and to_bool."""

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (False, ""),
        (True, "1"),
        (0.0, "0"),
        (42.0, "42"),
        (3.5, "3.5"),
        (0.1 + 0.2, "0.30000000000000004"),
        (12, "12"),
        ("abc", "abc"),
    ])
    def test_to_string(self, value, expected):
        """Rendered string forms."""
        assert to_string(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("12abc", 12),
        ("3.9", 3),
        ("-3.9", -3),
        ("abc", 0),
        (None, 0),
        (True, 1),
        (False, 0),
        (2 ** 70, 2 ** 70),
        (float("inf"), 0),
    ])
    def test_to_int(self, value, expected):
        """Loose int conversion truncates toward zero."""
        assert to_int(value) == expected

    def test_to_float(self):
        """Loose float conversion."""
        assert to_float("1.5kg") == 1.5
        assert to_float(" 2e2") == 200.0
        assert to_float("x1") == 0.0
        assert to_float(None) == 0.0
        assert to_float("\u0661\u0662") == 0.0
        assert to_float("7\u0661") == 7.0

    @pytest.mark.parametrize("value,expected", [
        (None, False),
        (False, False),
        (0, False),
        (0.0, False),
        ("", False),
        ("0", False),
        ("0.0", True),
        (" ", True),
        ("false", True),
        (1, True),
    ])
    def test_to_bool(self, value, expected):
        """Loose truthiness: only "" and "0" are false strings."""
        assert to_bool(value) is expected
