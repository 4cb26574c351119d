"""
Library exceptions.

Data-shape problems (non-numeric operands, zero divisors, null input to a
formatter) never raise; they degrade the chain to None. The exceptions below
cover programmer errors and the explicit fail-fast operations.
"""

import html
from http import HTTPStatus
from typing import Any, Dict, Optional


class SmartStringError(Exception):
    """Base exception for SmartString errors"""

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidValueError(SmartStringError, TypeError):
    """Raised when a value is not a supported scalar"""

    def __init__(self, value: Any):
        type_name = type(value).__name__
        super().__init__(
            message=f"Unsupported value type: {type_name}",
            details={"type": type_name}
        )


class InvalidCallbackError(SmartStringError, TypeError):
    """Raised when apply() receives something that cannot be called"""

    def __init__(self, func: Any):
        super().__init__(
            message=f"Function {func!r} is not callable",
            details={"type": type(func).__name__}
        )


class MissingValueError(SmartStringError):
    """Raised by or_throw() when the value is missing"""

    def __init__(self, message: str):
        super().__init__(message=html.escape(message))


class NotFoundError(SmartStringError):
    """Raised by or_404() when the value is missing"""

    DEFAULT_MESSAGE = "The requested URL was not found on this server."

    def __init__(self, message: Optional[str] = None):
        message = html.escape(message or self.DEFAULT_MESSAGE)
        super().__init__(
            message=message,
            status_code=HTTPStatus.NOT_FOUND,
        )
        self.content_type = "text/html; charset=utf-8"
        self.body = (
            "<!DOCTYPE html>\n"
            "<html>\n"
            "<head>\n"
            "    <title>Not Found</title>\n"
            "</head>\n"
            "<body>\n"
            "    <h1>Not Found</h1>\n"
            f"    <p>{message}</p>\n"
            "</body>\n"
            "</html>\n"
        )


class RedirectRequired(SmartStringError):
    """Raised by or_redirect() when the value is missing"""

    def __init__(self, location: str, status_code: int = HTTPStatus.FOUND):
        super().__init__(
            message=f"Redirect to {location}",
            status_code=status_code,
            details={"location": location}
        )
        self.location = location
