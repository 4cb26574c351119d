"""
smartstring - immutable, chainable scalar values for template output

Wrapped values with:
- Auto HTML-encoding when rendered
- Missing/blank/zero/empty classification
- Arithmetic chains with sticky error propagation
- Word- and character-limited truncation
- Number, percent, date and phone formatting
"""

__version__ = "0.1.0"

from .context import Context, PhoneFormat, get_context, reset_context, set_context
from .core.errors import (
    InvalidCallbackError,
    InvalidValueError,
    MissingValueError,
    NotFoundError,
    RedirectRequired,
    SmartStringError,
)
from .smart_string import SmartString

__all__ = [
    "SmartString",
    "Context",
    "PhoneFormat",
    "get_context",
    "set_context",
    "reset_context",
    "SmartStringError",
    "InvalidValueError",
    "InvalidCallbackError",
    "MissingValueError",
    "NotFoundError",
    "RedirectRequired",
]
