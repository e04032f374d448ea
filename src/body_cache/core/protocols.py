"""
Protocols and interfaces for body-cache.

Defines the contract an underlying server-side request must satisfy to be
wrapped by the content caching decorator.
"""

from typing import BinaryIO, Mapping, Optional, Protocol, Sequence, runtime_checkable

# Parameter name -> ordered values; a value may be None for a bare name
ParameterMap = Mapping[str, Sequence[Optional[str]]]


@runtime_checkable
class HttpRequest(Protocol):
    """Server-side HTTP request as seen by the caching decorator."""

    @property
    def content_length(self) -> int:
        """Declared body length in bytes, -1 when unknown."""
        ...

    @property
    def content_type(self) -> Optional[str]:
        """Declared content type, if any."""
        ...

    @property
    def character_encoding(self) -> Optional[str]:
        """Declared character encoding, if any."""
        ...

    @property
    def method(self) -> str:
        """HTTP method."""
        ...

    def get_input_stream(self) -> BinaryIO:
        """Return the raw request body stream."""
        ...

    def get_parameter_map(self) -> ParameterMap:
        """Return the parsed request parameters."""
        ...
