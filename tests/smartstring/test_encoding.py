"""Tests for output encoders and HTML-aware string helpers."""

import json

import pytest

from smartstring import SmartString
from smartstring.encoding import html_encode, json_encode, nl2br, text_only, trim, url_encode

SAMPLE = "O'Reilly & Sons <Web &nbsp; Shop/>"


class TestHtmlEncode:
    """Test html_encode."""

    def test_escapes_special_characters(self):
        """& < > " ' are escaped, entities are double-encoded."""
        assert html_encode(SAMPLE) == "O&apos;Reilly &amp; Sons &lt;Web &amp;nbsp; Shop/&gt;"
        assert html_encode('say "hi"') == "say &quot;hi&quot;"

    @pytest.mark.parametrize("tag", ["<br>", "<br/>", "<br />", "<BR>"])
    def test_br_tags_allowed(self, tag):
        """Line break tags pass through by default."""
        assert html_encode(f"a{tag}b") == f"a{tag}b"

    def test_br_tags_encoded_on_request(self):
        """encode_br_tags escapes them too."""
        assert html_encode("a<br>b", encode_br_tags=True) == "a&lt;br&gt;b"

    def test_other_tags_still_escaped(self):
        """Only br is special."""
        assert html_encode("<brx>") == "&lt;brx&gt;"

    @pytest.mark.parametrize("value,expected", [(None, ""), (False, ""), (True, "1"), (1.5, "1.5"), (2.0, "2")])
    def test_scalars(self, value, expected):
        """Non-strings render through their string form."""
        assert html_encode(value) == expected


class TestUrlEncode:
    """Test url_encode."""

    def test_form_encoding(self):
        """Spaces become +, reserved characters are percent-encoded."""
        assert url_encode(SAMPLE) == "O%27Reilly+%26+Sons+%3CWeb+%26nbsp%3B+Shop%2F%3E"
        assert url_encode("Save 10%+ off") == "Save+10%25%2B+off"

    def test_unreserved(self):
        """Only A-Za-z0-9 and _.- are left alone."""
        assert url_encode("a-b_c.d~e") == "a-b_c.d%7Ee"

    def test_none(self):
        """None encodes to an empty string."""
        assert url_encode(None) == ""


class TestJsonEncode:
    """Test json_encode."""

    def test_script_safe_string(self):
        """Tags, ampersands and quotes become hex escapes."""
        encoded = json_encode('<script>alert("XSS & Injection!");</script>')
        assert encoded == '"\\u003Cscript\\u003Ealert(\\u0022XSS \\u0026 Injection!\\u0022);\\u003C/script\\u003E"'

    def test_apostrophe_and_slash(self):
        """Apostrophes are escaped, slashes are not."""
        assert json_encode("it's a/b") == '"it\\u0027s a/b"'

    def test_unicode_left_literal(self):
        """Non-ASCII text is not escaped."""
        assert json_encode("café ☕") == '"café ☕"'

    def test_backslash_quote(self):
        """An escaped backslash before a quote survives."""
        encoded = json_encode('\\"')
        assert json.loads(encoded) == '\\"'

    @pytest.mark.parametrize("value,expected", [(None, "null"), (True, "true"), (3, "3"), (1.5, "1.5")])
    def test_scalars(self, value, expected):
        """Non-strings use plain JSON."""
        assert json_encode(value) == expected

    def test_nan_rejected(self):
        """NaN has no JSON form."""
        with pytest.raises(ValueError):
            json_encode(float("nan"))


class TestTextOnly:
    """Test text_only."""

    def test_decodes_entities(self):
        """Entities are decoded."""
        assert text_only("O'Reilly said &quot;this &gt; that&quot;") == 'O\'Reilly said "this > that"'

    def test_strips_tags_and_trims(self):
        """Tags removed, whitespace trimmed."""
        assert text_only(" <b> Hello World </b>") == "Hello World"
        assert text_only("<p>One</p><p>Two</p>") == "OneTwo"

    def test_encoded_tags_are_removed(self):
        """Entities are decoded before tags are stripped."""
        assert text_only("&lt;i&gt;hi&lt;/i&gt;") == "hi"

    def test_empty_and_none(self):
        """Empty text stays empty, None stays None."""
        assert text_only("") == ""
        assert text_only("   ") == ""
        assert text_only(None) is None

    def test_numbers(self):
        """Numbers come back as their string form."""
        assert text_only(42) == "42"


class TestNl2br:
    """Test nl2br."""

    def test_mixed_newlines(self):
        """Each newline style is one break, and the newline is kept."""
        assert nl2br("Hello\nWorld\r\nAgain\rAnd\n\rAgain") == "Hello<br>\nWorld<br>\r\nAgain<br>\rAnd<br>\n\rAgain"

    def test_none(self):
        """None propagates."""
        assert nl2br(None) is None

    def test_renders_breaks(self):
        """Breaks survive HTML encoding of the wrapper."""
        assert str(SmartString("a & b\nc").nl2br()) == "a &amp; b<br>\nc"


class TestTrim:
    """Test trim."""

    def test_default_characters(self):
        """Whitespace and NUL are stripped from both ends."""
        assert trim(" \t\n\r\0\x0bhello\x0b ") == "hello"

    def test_custom_characters(self):
        """Custom character set."""
        assert trim("--hello--", "-") == "hello"

    def test_none(self):
        """None propagates."""
        assert trim(None) is None

    def test_non_breaking_space_kept(self):
        """Only the default set is stripped."""
        assert trim("\u00a0x\u00a0") == "\u00a0x\u00a0"
