"""
Character encoding helpers.

Resolves encoding names and percent-encodes form names and values the way
``application/x-www-form-urlencoded`` bodies are written on the wire.
"""

import codecs
from typing import Optional
from urllib.parse import quote_plus

from werkzeug.http import parse_options_header

from .exceptions import UnsupportedEncodingError

# Encoding assumed when a request does not declare one
DEFAULT_CHARACTER_ENCODING = "ISO-8859-1"

# Characters left literal besides the unreserved set
_FORM_SAFE_CHARS = "*"


def resolve_encoding(encoding: str) -> str:
    """Return the canonical codec name for ``encoding``.

    Raises:
        UnsupportedEncodingError: If no codec is registered under that name.
    """
    try:
        return codecs.lookup(encoding).name
    except (LookupError, TypeError) as e:
        raise UnsupportedEncodingError(str(encoding), component="encoding") from e


def url_encode(value: str, encoding: str) -> str:
    """Percent-encode a form name or value using ``encoding``.

    Spaces become ``+``; every byte outside the unreserved set and ``*`` is
    written as ``%XX``.

    Raises:
        UnsupportedEncodingError: If the encoding is unknown or cannot
            represent ``value``.
    """
    codec = resolve_encoding(encoding)
    try:
        return quote_plus(value, safe=_FORM_SAFE_CHARS, encoding=codec)
    except UnicodeEncodeError as e:
        raise UnsupportedEncodingError(
            codec, reason=f"cannot encode {value!r}", component="encoding"
        ) from e


def charset_from_content_type(content_type: Optional[str]) -> Optional[str]:
    """Return the ``charset`` parameter of a content type header, if present."""
    if not content_type:
        return None
    _, options = parse_options_header(content_type)
    return options.get("charset") or None
