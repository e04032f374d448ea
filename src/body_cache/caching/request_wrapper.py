"""
Request decorator that caches everything read from the request body.

``ContentCachingRequestWrapper`` wraps an ``HttpRequest`` and intercepts body
access. Bytes read through ``get_input_stream()`` or ``get_reader()`` are
mirrored into an in-memory buffer which ``get_content_as_bytes()`` exposes
once the application is done with the request, e.g. to a logging middleware.

Form POSTs that the framework parsed into parameters without touching the
stream leave the buffer empty; for those, ``get_content_as_bytes()`` rebuilds
an equivalent ``application/x-www-form-urlencoded`` body from the parameter
map.

A wrapper belongs to exactly one in-flight request and performs no locking.
Callers must not race the first call to ``get_input_stream()`` or
``get_reader()`` from several threads.
"""

import io
from typing import Any, Optional

from ..core.encoding import DEFAULT_CHARACTER_ENCODING, resolve_encoding, url_encode
from ..core.exceptions import ContentReconstructionError, UnsupportedEncodingError
from ..core.logging import get_logger
from ..core.protocols import HttpRequest, ParameterMap
from .buffer import ContentBuffer
from .input_stream import ContentCachingInputStream

logger = get_logger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
METHOD_POST = "POST"


class ContentCachingRequestWrapper:
    """Caches all content read from the wrapped request's body."""

    def __init__(
        self,
        request: HttpRequest,
        default_encoding: str = DEFAULT_CHARACTER_ENCODING,
    ):
        self._request = request
        self._default_encoding = default_encoding
        self._cached_content = ContentBuffer(request.content_length)
        self._input_stream: Optional[ContentCachingInputStream] = None
        self._reader: Optional[io.TextIOWrapper] = None

    @property
    def request(self) -> HttpRequest:
        """The wrapped request."""
        return self._request

    @property
    def content_length(self) -> int:
        return self._request.content_length

    @property
    def content_type(self) -> Optional[str]:
        return self._request.content_type

    @property
    def method(self) -> str:
        return self._request.method

    @property
    def character_encoding(self) -> str:
        """Declared request encoding, or the default when none is declared."""
        return self._request.character_encoding or self._default_encoding

    @property
    def capacity_hint(self) -> int:
        """Initial size hint of the content buffer."""
        return self._cached_content.capacity_hint

    def get_parameter_map(self) -> ParameterMap:
        return self._request.get_parameter_map()

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not defined on the wrapper
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._request, name)

    def get_input_stream(self) -> ContentCachingInputStream:
        """Return the caching body stream, creating it on first use."""
        if self._input_stream is None:
            self._input_stream = ContentCachingInputStream(
                self._request.get_input_stream(), self._cached_content
            )
            logger.debug(
                "Content caching stream created",
                capacity_hint=self._cached_content.capacity_hint,
            )
        return self._input_stream

    def get_reader(self) -> io.TextIOWrapper:
        """Return a text reader over the caching stream, creating it on first use.

        Raises:
            UnsupportedEncodingError: If the request encoding is unknown.
        """
        if self._reader is None:
            encoding = resolve_encoding(self.character_encoding)
            self._reader = io.TextIOWrapper(self.get_input_stream(), encoding=encoding)
            logger.debug("Content caching reader created", encoding=encoding)
        return self._reader

    def get_content_as_bytes(self) -> bytes:
        """Return the cached request content.

        An empty buffer on a form POST is first filled from the parameter map.

        Raises:
            ContentReconstructionError: If a parameter cannot be encoded in the
                request encoding. The buffer is left unchanged.
        """
        if not self._cached_content and self._is_form_post():
            self._write_request_params_to_content()
        return self._cached_content.snapshot()

    def _is_form_post(self) -> bool:
        content_type = self.content_type
        return (
            content_type is not None
            and FORM_CONTENT_TYPE in content_type
            and (self.method or "").upper() == METHOD_POST
        )

    def _write_request_params_to_content(self) -> None:
        encoding = self.character_encoding
        pairs = []
        try:
            for name, values in self.get_parameter_map().items():
                encoded_name = url_encode(name, encoding)
                for value in values:
                    if value is None:
                        pairs.append(encoded_name)
                    else:
                        pairs.append(f"{encoded_name}={url_encode(value, encoding)}")
        except UnsupportedEncodingError as e:
            logger.error(
                "Form content reconstruction failed",
                encoding=encoding,
                error=str(e),
            )
            raise ContentReconstructionError(
                e.message, component="request_wrapper"
            ) from e

        content = "&".join(pairs).encode("ascii")
        if not self._cached_content:
            self._cached_content.write(content)
            logger.debug(
                "Form content reconstructed from parameters",
                parameter_count=len(pairs),
                size=len(content),
            )
