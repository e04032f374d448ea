"""
body-cache: request body caching for server-side HTTP requests.

Wraps a request so every byte read from its body is kept in memory and can
be retrieved after the application has consumed it.
"""

from .caching import ContentBuffer, ContentCachingInputStream, ContentCachingRequestWrapper
from .core.encoding import DEFAULT_CHARACTER_ENCODING
from .core.exceptions import (
    BodyCacheError,
    ConfigurationError,
    ContentReconstructionError,
    UnsupportedEncodingError,
)
from .core.protocols import HttpRequest, ParameterMap

__version__ = "0.1.0"

__all__ = [
    "ContentBuffer",
    "ContentCachingInputStream",
    "ContentCachingRequestWrapper",
    "DEFAULT_CHARACTER_ENCODING",
    "BodyCacheError",
    "ConfigurationError",
    "ContentReconstructionError",
    "UnsupportedEncodingError",
    "HttpRequest",
    "ParameterMap",
]
