"""
SmartString - immutable, chainable wrapper around a single scalar.

A SmartString holds one raw value (str, int, float, bool or None), the
Context it formats with, and the sticky numeric error flag. Every method
either answers a question about the value (predicates, conversions,
encoders) or returns a new SmartString; the receiver is never changed.

    >>> price = SmartString(19.99)
    >>> price.multiply(3).number_format(2).value()
    '59.97'
    >>> str(SmartString("<b>hi</b>"))
    '&lt;b&gt;hi&lt;/b&gt;'
"""

from __future__ import annotations

import html
from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from . import arithmetic, classify, coercion, conditional, encoding, formatting, truncate
from .arithmetic import NumericResult
from .context import Context, get_context
from .core.errors import (
    InvalidCallbackError,
    InvalidValueError,
    MissingValueError,
    NotFoundError,
    RedirectRequired,
)
from .core.logging import get_context_logger

logger = get_context_logger(__name__)


class SmartString(BaseModel):
    """
    Immutable wrapper around a scalar value.

    Attributes:
        raw_value: The wrapped scalar
        has_numeric_error: True once an arithmetic step in the chain failed
        context: Formatting and coercion settings carried down the chain
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    raw_value: Any = Field(default=None, description="The wrapped scalar")
    has_numeric_error: bool = Field(default=False, description="Sticky arithmetic error flag")
    context: Context = Field(description="Formatting and coercion settings")

    def __init__(self, value: Any = None, *, context: Optional[Context] = None):
        """
        Wrap a scalar.

        Args:
            value: str, int, float, bool, None, or another SmartString
                (whose raw value is taken)
            context: The Context (None = use current default)

        Raises:
            InvalidValueError: For lists, dicts and other non-scalars
        """
        raw = coercion.unwrap(value)

        if context is None:
            context = get_context()

        super().__init__(raw_value=raw, context=context)

    @classmethod
    def new(cls, value: Any = None, *, context: Optional[Context] = None) -> SmartString:
        return cls(value, context=context)

    @staticmethod
    def get_raw_value(value: Any) -> Any:
        """Unwrap a SmartString, or a list/tuple/dict of them, to raw values."""
        return coercion.get_raw_value(value)

    def _derive(self, value: Any, poisoned: Optional[bool] = None) -> SmartString:
        """New SmartString with the same context; the error flag carries over unless given."""
        if not coercion.is_scalar(value):
            raise InvalidValueError(value)
        if poisoned is None:
            poisoned = self.has_numeric_error
        return self.model_copy(update={"raw_value": value, "has_numeric_error": poisoned})

    def _from_result(self, result: NumericResult) -> SmartString:
        return self._derive(result.value, result.poisoned)

    # =========================================================================
    # Access and conversion
    # =========================================================================

    def value(self) -> Any:
        return self.raw_value

    def raw_html(self) -> Any:
        """The raw, unencoded value, for output of trusted HTML."""
        return self.raw_value

    def to_int(self) -> int:
        return coercion.to_int(self.raw_value)

    def to_float(self) -> float:
        return coercion.to_float(self.raw_value)

    def to_bool(self) -> bool:
        return coercion.to_bool(self.raw_value)

    def to_string(self) -> str:
        return coercion.to_string(self.raw_value)

    # =========================================================================
    # Encoding
    # =========================================================================

    def html_encode(self, encode_br_tags: bool = False) -> str:
        return encoding.html_encode(self.raw_value, encode_br_tags)

    def url_encode(self) -> str:
        return encoding.url_encode(self.raw_value)

    def json_encode(self) -> str:
        return encoding.json_encode(self.raw_value)

    def __str__(self) -> str:
        return self.html_encode()

    def __html__(self) -> str:
        """Markup protocol, so Jinja2/MarkupSafe templates don't escape twice."""
        return self.html_encode()

    def __repr__(self) -> str:
        flag = ", has_numeric_error=True" if self.has_numeric_error else ""
        return f"SmartString({self.raw_value!r}{flag})"

    # =========================================================================
    # String manipulation
    # =========================================================================

    def text_only(self) -> SmartString:
        return self._derive(encoding.text_only(self.raw_value))

    def nl2br(self) -> SmartString:
        return self._derive(encoding.nl2br(self.raw_value))

    def trim(self, chars: Optional[str] = None) -> SmartString:
        return self._derive(encoding.trim(self.raw_value, chars))

    def max_words(self, max_count: int, ellipsis: str = truncate.DEFAULT_ELLIPSIS) -> SmartString:
        return self._derive(truncate.max_words(self.raw_value, max_count, ellipsis))

    def max_chars(self, max_length: int, ellipsis: str = truncate.DEFAULT_ELLIPSIS) -> SmartString:
        return self._derive(truncate.max_chars(self.raw_value, max_length, ellipsis))

    # =========================================================================
    # Formatting
    # =========================================================================

    def number_format(self, decimals: int = 0) -> SmartString:
        return self._derive(formatting.number_format(self.raw_value, decimals, self.context))

    def date_format(self, fmt: Optional[str] = None) -> SmartString:
        return self._derive(formatting.date_format(self.raw_value, fmt, self.context))

    def date_time_format(self, fmt: Optional[str] = None) -> SmartString:
        return self._derive(formatting.date_time_format(self.raw_value, fmt, self.context))

    def phone_format(self) -> SmartString:
        return self._derive(formatting.phone_format(self.raw_value, self.context))

    # =========================================================================
    # Numeric operations
    # =========================================================================

    def _binary(self, operation: str, operand: Any) -> SmartString:
        return self._from_result(
            arithmetic.binary(
                operation,
                self.raw_value,
                operand,
                poisoned=self.has_numeric_error,
                context=self.context,
            )
        )

    def add(self, operand: Any) -> SmartString:
        return self._binary("add", operand)

    def subtract(self, operand: Any) -> SmartString:
        return self._binary("subtract", operand)

    def multiply(self, operand: Any) -> SmartString:
        return self._binary("multiply", operand)

    def divide(self, divisor: Any) -> SmartString:
        """Divide; a zero or non-numeric divisor nulls the rest of the chain."""
        return self._binary("divide", divisor)

    def percent(self, decimals: Optional[int] = None, zero_fallback: Any = None) -> SmartString:
        """
        Format a ratio as a percentage.

        Args:
            decimals: Decimal places (None = as many as the value has, at most 4)
            zero_fallback: Returned as-is when the value is exactly zero

        Examples:
            >>> SmartString(0.4567).percent(2).value()
            '45.67%'
            >>> SmartString(0).percent(zero_fallback="-").value()
            '-'
        """
        return self._from_result(
            arithmetic.percent(
                self.raw_value,
                decimals,
                zero_fallback,
                poisoned=self.has_numeric_error,
                context=self.context,
            )
        )

    def percent_of(self, total: Any, decimals: Optional[int] = 0) -> SmartString:
        return self._from_result(
            arithmetic.percent_of(
                self.raw_value,
                total,
                decimals,
                poisoned=self.has_numeric_error,
                context=self.context,
            )
        )

    # =========================================================================
    # Conditional operations
    # =========================================================================

    def or_(self, fallback: Any) -> SmartString:
        return self._derive(conditional.or_(self.raw_value, fallback))

    def and_(self, suffix: Any) -> SmartString:
        return self._derive(conditional.and_(self.raw_value, suffix))

    def and_prefix(self, prefix: Any) -> SmartString:
        return self._derive(conditional.and_prefix(self.raw_value, prefix))

    def if_blank(self, fallback: Any) -> SmartString:
        return self._derive(conditional.if_blank(self.raw_value, fallback))

    def if_null(self, fallback: Any) -> SmartString:
        return self._derive(conditional.if_null(self.raw_value, fallback))

    def if_zero(self, fallback: Any) -> SmartString:
        return self._derive(conditional.if_zero(self.raw_value, fallback))

    def if_(self, condition: Any, value_if_true: Any) -> SmartString:
        return self._derive(conditional.if_(self.raw_value, condition, value_if_true))

    def set(self, new_value: Any) -> SmartString:
        """Replace the value and start a fresh chain (error flag cleared)."""
        return self._derive(conditional.set_(self.raw_value, new_value), poisoned=False)

    # =========================================================================
    # Predicates
    # =========================================================================

    def is_null(self) -> bool:
        return classify.is_null(self.raw_value)

    def is_missing(self) -> bool:
        return classify.is_missing(self.raw_value)

    def is_blank(self) -> bool:
        return classify.is_blank(self.raw_value)

    def is_zero(self) -> bool:
        return classify.is_zero(self.raw_value)

    def is_empty(self) -> bool:
        return classify.is_empty(self.raw_value)

    def is_not_empty(self) -> bool:
        return not classify.is_empty(self.raw_value)

    # =========================================================================
    # Fail-fast
    # =========================================================================

    def or_404(self, message: Optional[str] = None) -> SmartString:
        """
        Return self, or raise NotFoundError when the value is missing.

        The exception carries status 404 and a ready-made HTML body for web
        frameworks to send back.
        """
        if self.is_missing():
            logger.warning("Required value missing, responding 404", extra_data={"message": message})
            raise NotFoundError(message)
        return self

    def or_die(self, message: str) -> SmartString:
        """Return self, or exit the process with message when the value is missing."""
        if self.is_missing():
            logger.warning("Required value missing, exiting", extra_data={"message": message})
            raise SystemExit(html.escape(message))
        return self

    def or_throw(self, message: str) -> SmartString:
        if self.is_missing():
            logger.warning("Required value missing, raising", extra_data={"message": message})
            raise MissingValueError(message)
        return self

    def or_redirect(self, url: str) -> SmartString:
        if self.is_missing():
            logger.warning("Required value missing, redirecting", extra_data={"location": url})
            raise RedirectRequired(url)
        return self

    # =========================================================================
    # Misc
    # =========================================================================

    def apply(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> SmartString:
        """
        Call func(raw_value, *args, **kwargs) and wrap the result.

        Raises:
            InvalidCallbackError: If func is not callable
            InvalidValueError: If func returns a non-scalar

        Examples:
            >>> SmartString("hello").apply(str.upper).value()
            'HELLO'
            >>> SmartString("a,b").apply(str.replace, ",", ";").value()
            'a;b'
        """
        if not callable(func):
            raise InvalidCallbackError(func)
        return self._derive(func(self.raw_value, *args, **kwargs))
