"""
Web integration components.

Contains the WSGI request adapter and request logging middleware.
"""

from .logging_middleware import (
    ENVIRON_KEY,
    ASGIRequestLoggingMiddleware,
    RequestLoggingMiddleware,
    build_request_message,
)
from .wsgi import WSGIRequest

__all__ = [
    "ENVIRON_KEY",
    "ASGIRequestLoggingMiddleware",
    "RequestLoggingMiddleware",
    "build_request_message",
    "WSGIRequest",
]
