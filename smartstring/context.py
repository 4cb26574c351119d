"""
Context system for SmartString chains.

The Context holds the configuration that coercion and formatting read:
the null-as-zero policy, number separators, default date formats, the
display timezone and the phone-format table.

Each SmartString carries the Context it was created with and hands it to
every descendant, so a chain is evaluated against one configuration even
if the default changes while it is alive.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .core.config import Settings, get_settings


class PhoneFormat(BaseModel):
    """One row of the phone-format table: a digit count and its template."""

    model_config = ConfigDict(frozen=True)

    digits: int = Field(gt=0, description="Number of digits this template applies to")
    template: str = Field(description="Output template, '#' is replaced by each digit in order")

    @field_validator("template")
    @classmethod
    def _placeholders_match_digits(cls, template: str, info) -> str:
        digits = info.data.get("digits")
        if digits is not None and template.count("#") != digits:
            raise ValueError(
                f"template {template!r} has {template.count('#')} placeholders, expected {digits}"
            )
        return template


def _default_phone_formats() -> Tuple[PhoneFormat, ...]:
    return (
        PhoneFormat(digits=10, template="(###) ###-####"),
        PhoneFormat(digits=11, template="# (###) ###-####"),
    )


class Context(BaseModel):
    """
    Formatting and coercion configuration.

    Contexts are immutable, hashable values: build one, pass it to
    SmartString(..., context=ctx) or install it as the default with
    set_context(). Use copy_with() to derive a variant.

    Examples:
        >>> ctx = Context(decimal_separator=",", thousands_separator=".")
        >>> SmartString(1234.5, context=ctx).number_format(2).value()
        '1.234,50'
    """

    model_config = ConfigDict(frozen=True)

    null_as_zero: bool = False
    decimal_separator: str = "."
    thousands_separator: str = ","
    date_format: str = "%Y-%m-%d"
    date_time_format: str = "%Y-%m-%d %H:%M:%S"
    timezone: Optional[str] = None
    phone_formats: Tuple[PhoneFormat, ...] = Field(default_factory=_default_phone_formats)

    @classmethod
    def from_settings(cls, settings: Settings) -> Context:
        """Build a Context seeded from library settings."""
        return cls(
            null_as_zero=settings.NULL_AS_ZERO,
            decimal_separator=settings.DECIMAL_SEPARATOR,
            thousands_separator=settings.THOUSANDS_SEPARATOR,
            date_format=settings.DATE_FORMAT,
            date_time_format=settings.DATE_TIME_FORMAT,
            timezone=settings.TIMEZONE,
        )

    def phone_template(self, digit_count: int) -> Optional[str]:
        """Return the first template registered for digit_count, or None."""
        for phone_format in self.phone_formats:
            if phone_format.digits == digit_count:
                return phone_format.template
        return None

    def copy_with(self, **changes: Any) -> Context:
        """Return a validated copy of this context with some fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return Context(**data)

    def __repr__(self):
        return (
            f"Context(null_as_zero={self.null_as_zero}, "
            f"decimal={self.decimal_separator!r}, thousands={self.thousands_separator!r})"
        )


# Default context used when a SmartString is created without one
_current_context: Optional[Context] = None


def get_context() -> Context:
    """
    Get the current default context.

    Created lazily from library settings on first use.
    """
    global _current_context

    if _current_context is None:
        _current_context = Context.from_settings(get_settings())
    return _current_context


def set_context(context: Context) -> Context:
    """
    Install a new default context and return it.

    Only SmartStrings created afterwards pick it up; existing chains keep
    the context they were created with.
    """
    global _current_context

    if not isinstance(context, Context):
        raise TypeError(f"expected Context, got {type(context).__name__}")
    _current_context = context
    return _current_context


def reset_context() -> None:
    """Drop the default context so the next get_context() rebuilds it from settings."""
    global _current_context
    _current_context = None
