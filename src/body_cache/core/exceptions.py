"""
Exception hierarchy for body-cache.

Provides structured error handling with specific error types for the
encoding and content reconstruction failure modes.
"""

from typing import Any, Dict, Optional


class BodyCacheError(Exception):
    """Base exception for all body-cache errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        component: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.component = component

    def __str__(self) -> str:
        """String representation of the error."""
        base_msg = f"[{self.component or 'BodyCache'}] {self.message}"
        if self.error_code:
            base_msg = f"[{self.error_code}] {base_msg}"
        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "component": self.component,
            "details": self.details,
        }


class ConfigurationError(BodyCacheError):
    """Exception raised when configuration is invalid or missing."""

    pass


class UnsupportedEncodingError(BodyCacheError, OSError):
    """Exception raised when a character encoding is unknown or unusable.

    Also an ``OSError``, since it surfaces from stream and reader setup.
    """

    def __init__(self, encoding: str, reason: str = "", **kwargs: Any) -> None:
        message = f"Unsupported character encoding: {encoding}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(
            message,
            error_code="UNSUPPORTED_ENCODING",
            details={"encoding": encoding, "reason": reason},
            **kwargs,
        )
        self.encoding = encoding


class ContentReconstructionError(BodyCacheError):
    """Exception raised when a form body cannot be rebuilt from parameters."""

    def __init__(self, reason: str, **kwargs: Any) -> None:
        super().__init__(
            f"Failed to reconstruct form content: {reason}",
            error_code="CONTENT_RECONSTRUCTION_FAILED",
            details={"reason": reason},
            **kwargs,
        )
