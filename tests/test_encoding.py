"""
Tests for character encoding helpers.
"""

import pytest

from body_cache.core.encoding import (
    DEFAULT_CHARACTER_ENCODING,
    charset_from_content_type,
    resolve_encoding,
    url_encode,
)
from body_cache.core.exceptions import UnsupportedEncodingError


class TestResolveEncoding:
    """Test encoding name resolution."""

    def test_known_encodings(self) -> None:
        """Test aliases resolve to canonical codec names."""
        assert resolve_encoding("UTF-8") == "utf-8"
        assert resolve_encoding(DEFAULT_CHARACTER_ENCODING) == "iso8859-1"

    def test_unknown_encoding(self) -> None:
        """Test unknown names raise UnsupportedEncodingError."""
        with pytest.raises(UnsupportedEncodingError) as exc_info:
            resolve_encoding("no-such-charset")

        assert exc_info.value.error_code == "UNSUPPORTED_ENCODING"
        assert exc_info.value.details["encoding"] == "no-such-charset"
        assert isinstance(exc_info.value.__cause__, LookupError)


class TestUrlEncode:
    """Test form percent-encoding."""

    def test_unreserved_characters_are_kept(self) -> None:
        """Test letters, digits and safe marks pass through."""
        assert url_encode("aZ09-_.*", "UTF-8") == "aZ09-_.*"

    def test_space_becomes_plus(self) -> None:
        """Test spaces are written as plus signs."""
        assert url_encode("a b", "UTF-8") == "a+b"

    def test_reserved_characters_are_escaped(self) -> None:
        """Test form delimiters are escaped."""
        assert url_encode("a&b=c+d/e", "UTF-8") == "a%26b%3Dc%2Bd%2Fe"

    def test_encoding_is_applied(self) -> None:
        """Test non-ASCII characters follow the given encoding."""
        assert url_encode("ü", "UTF-8") == "%C3%BC"
        assert url_encode("ü", "ISO-8859-1") == "%FC"

    def test_unrepresentable_value(self) -> None:
        """Test values the encoding cannot hold raise UnsupportedEncodingError."""
        with pytest.raises(UnsupportedEncodingError) as exc_info:
            url_encode("ü", "ascii")
        assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)

    def test_unknown_encoding(self) -> None:
        """Test unknown encodings raise UnsupportedEncodingError."""
        with pytest.raises(UnsupportedEncodingError):
            url_encode("value", "no-such-charset")


class TestCharsetFromContentType:
    """Test charset extraction from content type headers."""

    def test_charset_present(self) -> None:
        """Test the charset parameter is returned."""
        assert charset_from_content_type("text/plain; charset=UTF-8") == "UTF-8"

    def test_quoted_charset(self) -> None:
        """Test quoted charset values are unquoted."""
        assert charset_from_content_type('text/plain; charset="utf-8"') == "utf-8"

    def test_charset_missing(self) -> None:
        """Test content types without charset return None."""
        assert charset_from_content_type("application/json") is None
        assert charset_from_content_type(None) is None
        assert charset_from_content_type("") is None
