"""
Output encoders and HTML-aware string helpers.

The encoders (html_encode, url_encode, json_encode) return plain strings for
embedding in a page. text_only, nl2br and trim return new raw values and
pass None through unchanged.
"""

from __future__ import annotations

import html
import json
import re
from typing import Any, Optional
from urllib.parse import quote_plus

from lxml import etree
from lxml import html as lxml_html

from .coercion import to_string
from .core.logging import get_context_logger

logger = get_context_logger(__name__)

# Default trim set: space, tab, newline, carriage return, NUL, vertical tab
DEFAULT_TRIM_CHARS = " \t\n\r\0\x0b"

# <br>, <br/>, <br /> after escaping, any case
_ESCAPED_BR_TAG = re.compile(r"&lt;(br\s*/?)&gt;", re.IGNORECASE)

_NEWLINE = re.compile(r"(\r\n|\n\r|\n|\r)")

# Characters hex-escaped inside JSON strings so the output is safe in <script>
_JSON_HEX_ESCAPES = {
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "'": "\\u0027",
}


# =============================================================================
# Encoders
# =============================================================================


def html_encode(value: Any, encode_br_tags: bool = False) -> str:
    """
    Escape a raw value for HTML text or attribute context.

    Args:
        value: Raw scalar
        encode_br_tags: Also escape <br> tags. By default they are let
            through so nl2br() output renders as line breaks.

    Examples:
        >>> html_encode("O'Reilly & <Sons>")
        'O&apos;Reilly &amp; &lt;Sons&gt;'
        >>> html_encode("a<br>b")
        'a<br>b'
    """
    encoded = html.escape(to_string(value), quote=True).replace("&#x27;", "&apos;")
    if encode_br_tags:
        return encoded
    return _ESCAPED_BR_TAG.sub(r"<\1>", encoded)


def url_encode(value: Any) -> str:
    """
    Form-encode a raw value for use as a query string parameter value.

    Spaces become "+", everything outside A-Za-z0-9 and "_.-" is
    percent-encoded.
    """
    return quote_plus(to_string(value), safe="").replace("~", "%7E")


def json_encode(value: Any) -> str:
    """
    JSON-encode a raw value for embedding in a <script> block.

    Inside strings, < > & ' " are written as \\u003C-style escapes; slashes
    and non-ASCII characters are left literal.

    Raises:
        ValueError: For NaN or infinite floats, which JSON cannot represent
    """
    if isinstance(value, str):
        return _json_string(value)
    return json.dumps(value, allow_nan=False)


def _json_string(text: str) -> str:
    body = json.dumps(text, ensure_ascii=False)[1:-1]
    # json.dumps has already turned " into \"; rewrite that as a hex escape
    body = body.replace('\\"', "\\u0022")
    for char, escape in _JSON_HEX_ESCAPES.items():
        body = body.replace(char, escape)
    return f'"{body}"'


# =============================================================================
# String helpers
# =============================================================================


def text_only(value: Any) -> Optional[str]:
    """
    Reduce HTML to its trimmed text: entities decoded, tags removed.

    Examples:
        >>> text_only(" <b> Hello World </b>")
        'Hello World'
        >>> text_only("this &gt; that")
        'this > that'
    """
    if value is None:
        return None

    text = html.unescape(to_string(value))
    if not text.strip():
        return ""

    try:
        fragment = lxml_html.fragment_fromstring(text, create_parent="div")
    except (etree.ParserError, ValueError) as e:
        logger.warning(
            "Could not parse HTML, returning decoded text",
            extra_data={"error": str(e)},
        )
        return text.strip()

    return fragment.text_content().strip()


def nl2br(value: Any) -> Optional[str]:
    """
    Insert "<br>" before every line break.

    \\r\\n and \\n\\r count as single breaks; the breaks themselves are kept.
    """
    if value is None:
        return None
    return _NEWLINE.sub(r"<br>\1", to_string(value))


def trim(value: Any, chars: Optional[str] = None) -> Optional[str]:
    """Strip chars (default: whitespace and NUL) from both ends."""
    if value is None:
        return None
    return to_string(value).strip(DEFAULT_TRIM_CHARS if chars is None else chars)
