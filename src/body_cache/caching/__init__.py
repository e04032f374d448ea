"""Request body caching components."""

from .buffer import DEFAULT_CAPACITY, ContentBuffer
from .input_stream import ContentCachingInputStream
from .request_wrapper import ContentCachingRequestWrapper

__all__ = [
    "DEFAULT_CAPACITY",
    "ContentBuffer",
    "ContentCachingInputStream",
    "ContentCachingRequestWrapper",
]
