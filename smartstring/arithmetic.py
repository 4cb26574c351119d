"""
Arithmetic pipeline with sticky error propagation.

Each step coerces both operands with coerce_float() and returns a
NumericResult: the new raw value and whether the chain is poisoned. Once
a chain is poisoned (non-numeric operand, zero divisor) every later step
yields None, even when its own inputs are valid, so a template can write
``price.divide(qty).multiply(100).percent()`` without checking each step.

Nothing here raises for bad data.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Dict, NamedTuple, Optional

from .coercion import coerce_float, unwrap
from .context import Context, get_context
from .core.logging import get_context_logger
from .formatting import auto_percent_decimals, format_number

logger = get_context_logger(__name__)


class NumericResult(NamedTuple):
    """Outcome of one arithmetic step."""

    value: Any
    poisoned: bool


POISONED = NumericResult(None, True)

BINARY_OPERATIONS: Dict[str, Callable[[float, float], float]] = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}

# Operations whose right operand may not be zero
_NONZERO_DIVISOR = {"divide", "percent_of"}


def _poison(operation: str, reason: str, already_poisoned: bool) -> NumericResult:
    if not already_poisoned:
        logger.debug(
            "Arithmetic chain poisoned",
            extra_data={"operation": operation, "reason": reason},
        )
    return POISONED


def _failure(
    operation: str,
    left: Optional[float],
    right: Optional[float],
    poisoned: bool,
) -> Optional[str]:
    """Return why this step cannot produce a number, or None if it can."""
    if poisoned:
        return "chain already poisoned"
    if left is None:
        return "value is not numeric"
    if right is None:
        return "operand is not numeric"
    if operation in _NONZERO_DIVISOR and right == 0.0:
        return "division by zero"
    return None


def binary(
    operation: str,
    value: Any,
    operand: Any,
    poisoned: bool = False,
    context: Optional[Context] = None,
) -> NumericResult:
    """
    Apply add/subtract/multiply/divide to a raw value and an operand.

    Args:
        operation: One of BINARY_OPERATIONS
        value: Left raw value (or SmartString)
        operand: Right operand (raw or SmartString)
        poisoned: Error state carried by the chain so far
        context: Supplies the null-as-zero policy

    Returns:
        NumericResult with a float value, or (None, True) on failure

    Examples:
        >>> binary("divide", 0, 5)
        NumericResult(value=0.0, poisoned=False)
        >>> binary("divide", 10, "0")
        NumericResult(value=None, poisoned=True)
    """
    func = BINARY_OPERATIONS[operation]
    context = context or get_context()

    left = coerce_float(value, context.null_as_zero)
    right = coerce_float(operand, context.null_as_zero)

    reason = _failure(operation, left, right, poisoned)
    if reason is not None:
        return _poison(operation, reason, poisoned)

    return NumericResult(func(left, right), False)


def percent(
    value: Any,
    decimals: Optional[int] = None,
    zero_fallback: Any = None,
    poisoned: bool = False,
    context: Optional[Context] = None,
) -> NumericResult:
    """
    Format a ratio as a percentage (0.1234 -> "12.34%").

    Numeric validity is checked first; only then, if the coerced value is
    exactly 0.0 and zero_fallback is given, the fallback is returned as-is.
    With decimals=None the value's own precision is kept, up to four places.
    """
    context = context or get_context()
    left = coerce_float(value, context.null_as_zero)

    reason = _failure("percent", left, 0.0, poisoned)
    if reason is not None:
        return _poison("percent", reason, poisoned)

    if zero_fallback is not None and left == 0.0:
        return NumericResult(unwrap(zero_fallback), False)

    return _format_percentage(left * 100, decimals, context, poisoned)


def percent_of(
    value: Any,
    total: Any,
    decimals: Optional[int] = 0,
    poisoned: bool = False,
    context: Optional[Context] = None,
) -> NumericResult:
    """Format value as a percentage of total (24 of 100 -> "24%")."""
    context = context or get_context()
    left = coerce_float(value, context.null_as_zero)
    right = coerce_float(total, context.null_as_zero)

    reason = _failure("percent_of", left, right, poisoned)
    if reason is not None:
        return _poison("percent_of", reason, poisoned)

    return _format_percentage(left / right * 100, decimals, context, poisoned)


def _format_percentage(
    percentage: float,
    decimals: Optional[int],
    context: Context,
    poisoned: bool,
) -> NumericResult:
    if decimals is None:
        decimals = auto_percent_decimals(percentage)

    formatted = format_number(
        percentage,
        decimals,
        context.decimal_separator,
        context.thousands_separator,
    )
    if formatted is None:
        return _poison("percent", "result is not finite", poisoned)
    return NumericResult(f"{formatted}%", False)
