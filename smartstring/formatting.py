"""
Number, date and phone formatting.

Every formatter takes a raw scalar plus the Context carried by the chain
and returns a string, or None when the input cannot be formatted.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .classify import is_numeric
from .coercion import to_string
from .context import Context, get_context
from .core.logging import get_context_logger

logger = get_context_logger(__name__)

MAX_AUTO_PERCENT_DECIMALS = 4

# Significant digits used to decide how many decimals a percentage shows
PERCENT_SIGNIFICANT_DIGITS = 14


# =============================================================================
# Numbers
# =============================================================================


def format_number(
    number: float,
    decimals: int = 0,
    decimal_separator: str = ".",
    thousands_separator: str = ",",
) -> Optional[str]:
    """
    Format a number with grouped thousands, rounding half away from zero.

    Args:
        number: Value to format
        decimals: Digits after the decimal separator (negative treated as 0)
        decimal_separator: Separator between integer and fraction
        thousands_separator: Separator between groups of three digits

    Returns:
        Formatted string, or None for NaN/infinity

    Examples:
        >>> format_number(1234.5)
        '1,235'
        >>> format_number(-1234.567, 2, ",", ".")
        '-1.234,57'
    """
    if not math.isfinite(number):
        return None

    decimals = max(int(decimals or 0), 0)
    exact = Decimal(repr(float(number)))
    with localcontext() as ctx:
        # Room for every integer digit plus the requested fraction
        ctx.prec = max(ctx.prec, exact.adjusted() + decimals + 2)
        quantized = exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    if quantized == 0:
        quantized = abs(quantized)

    grouped = f"{quantized:,.{decimals}f}"
    return grouped.translate({ord(","): "\x00", ord("."): "\x01"}).replace(
        "\x00", thousands_separator
    ).replace("\x01", decimal_separator)


def number_format(value: Any, decimals: int = 0, context: Optional[Context] = None) -> Optional[str]:
    """Format a raw value with the context separators; non-numeric input gives None."""
    if not is_numeric(value):
        return None
    context = context or get_context()
    return format_number(
        float(value),
        decimals,
        context.decimal_separator,
        context.thousands_separator,
    )


def auto_percent_decimals(percentage: float) -> int:
    """
    Decimals needed to show a percentage as-is, capped at four (12.345 -> 3).

    The value is rendered to 14 significant digits first, so float noise such
    as 7.000000000000001 (0.07 * 100) counts as 7.
    """
    text = f"{percentage:.{PERCENT_SIGNIFICANT_DIGITS}g}"
    if "." not in text or "e" in text:
        return 0
    return min(len(text.split(".", 1)[1]), MAX_AUTO_PERCENT_DECIMALS)


# =============================================================================
# Dates
# =============================================================================


def _resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    if name is None:
        return None
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone, using local time", extra_data={"timezone": name})
        return None


def parse_datetime(value: Any, context: Context) -> Optional[datetime]:
    """
    Interpret a raw value as a point in time.

    Numbers (and numeric strings) are Unix timestamps; 0 means "no date".
    Strings are ISO-8601 dates, date-times or times of day (today's date).
    Aware values are converted to the context timezone.
    """
    tz = _resolve_timezone(context.timezone)

    if value is None or isinstance(value, bool):
        return None

    if is_numeric(value):
        timestamp = int(float(value))
        if timestamp == 0:
            return None
        try:
            return datetime.fromtimestamp(timestamp, tz)
        except (OverflowError, OSError, ValueError):
            logger.debug("Timestamp out of range", extra_data={"value": value})
            return None

    text = str(value).strip()
    if not text:
        return None

    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.combine(date.today(), time.fromisoformat(text))
        except ValueError:
            logger.debug("Unparseable date string", extra_data={"value": text})
            return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(tz) if tz is not None else parsed.astimezone()
    return parsed


def date_format(value: Any, fmt: Optional[str] = None, context: Optional[Context] = None) -> Optional[str]:
    """Format a date with a strftime pattern (default: context.date_format)."""
    context = context or get_context()
    moment = parse_datetime(value, context)
    if moment is None:
        return None
    return moment.strftime(fmt if fmt is not None else context.date_format)


def date_time_format(value: Any, fmt: Optional[str] = None, context: Optional[Context] = None) -> Optional[str]:
    """Format a date and time (default: context.date_time_format)."""
    context = context or get_context()
    return date_format(value, fmt if fmt is not None else context.date_time_format, context)


# =============================================================================
# Phone numbers
# =============================================================================

_NON_DIGITS = re.compile(r"[^0-9]")


def phone_format(value: Any, context: Optional[Context] = None) -> Optional[str]:
    """
    Format a phone number by its digit count.

    Every non-digit is discarded, then the template registered for the
    remaining digit count has its '#' placeholders filled left to right.

    Examples:
        >>> phone_format("555.123.4567")
        '(555) 123-4567'
        >>> phone_format("12345") is None
        True
    """
    context = context or get_context()
    digits = _NON_DIGITS.sub("", to_string(value))
    if not digits:
        return None

    template = context.phone_template(len(digits))
    if template is None:
        return None

    digit_iter = iter(digits)
    return "".join(next(digit_iter) if char == "#" else char for char in template)
