"""
Word- and character-limited truncation.

Both functions count Unicode characters (not bytes), return None for None
input, and on truncation strip a trailing run of Unicode punctuation before
appending the ellipsis. Interior punctuation is never touched.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Optional

from .coercion import to_string

DEFAULT_ELLIPSIS = "..."

_WHITESPACE_RUN = re.compile(r"\s+")


def strip_trailing_punctuation(text: str) -> str:
    """
    Remove the run of punctuation characters (Unicode category P*) at the end.

    Examples:
        >>> strip_trailing_punctuation("Hello, world!?")
        'Hello, world'
        >>> strip_trailing_punctuation("¿Qué tal…")
        '¿Qué tal'
    """
    end = len(text)
    while end > 0 and unicodedata.category(text[end - 1]).startswith("P"):
        end -= 1
    return text[:end]


def max_words(value: Any, max_count: int, ellipsis: str = DEFAULT_ELLIPSIS) -> Optional[str]:
    """
    Limit text to its first max_count words.

    Words are runs of non-whitespace; the kept words are rejoined with single
    spaces. Only when words were dropped is trailing punctuation stripped and
    the ellipsis appended.

    Examples:
        >>> max_words("The quick brown fox jumps over the lazy dog", 5)
        'The quick brown fox jumps...'
        >>> max_words("Hello,   world", 5)
        'Hello, world'
    """
    if value is None:
        return None

    words = _WHITESPACE_RUN.split(to_string(value).strip())
    kept = " ".join(words[:max_count])

    if len(words) > max_count:
        return strip_trailing_punctuation(kept) + ellipsis
    return kept


def max_chars(value: Any, max_length: int, ellipsis: str = DEFAULT_ELLIPSIS) -> Optional[str]:
    """
    Limit text to max_length characters, preferring a word boundary.

    Whitespace runs are collapsed to single spaces first. When the text is
    too long, the longest prefix of at most max_length characters that ends
    right before a space (or at the end of the text) is kept, its trailing
    punctuation stripped and the ellipsis appended. If no such prefix exists
    (one long word, or max_length <= 0) the text is cut at exactly
    max_length characters and the ellipsis appended without stripping.

    Examples:
        >>> max_chars("The quick brown fox", 12)
        'The quick...'
        >>> max_chars("Testing", 1)
        'T...'
    """
    if value is None:
        return None

    text = _WHITESPACE_RUN.sub(" ", to_string(value)).strip(" ")

    if len(text) <= max_length:
        return text

    if max_length > 0:
        boundary = re.match(rf".{{1,{max_length}}}(?= |\Z)", text, re.DOTALL)
        if boundary:
            return strip_trailing_punctuation(boundary.group(0)) + ellipsis

    return text[:max_length] + ellipsis
