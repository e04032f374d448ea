"""
WSGI adapter for the content caching wrapper.

``WSGIRequest`` exposes a PEP 3333 environ through the ``HttpRequest``
contract so it can be wrapped by ``ContentCachingRequestWrapper``. Environ
parsing is left to werkzeug.
"""

from typing import BinaryIO, Dict, List, Optional, Tuple

from werkzeug.wrappers import Request

from ..core.protocols import ParameterMap


class WSGIRequest:
    """``HttpRequest`` implementation over a WSGI environ."""

    def __init__(self, environ: Dict):
        self.environ = environ
        self._request = Request(environ)
        self._parameter_map: Optional[Dict[str, List[Optional[str]]]] = None

    @property
    def content_length(self) -> int:
        length = self._request.content_length
        return -1 if length is None else length

    @property
    def content_type(self) -> Optional[str]:
        return self._request.content_type or None

    @property
    def character_encoding(self) -> Optional[str]:
        return self._request.mimetype_params.get("charset") or None

    @property
    def method(self) -> str:
        return self._request.method

    @property
    def path(self) -> str:
        return self._request.script_root + self._request.path

    @property
    def query_string(self) -> str:
        return self._request.query_string.decode("latin-1")

    @property
    def remote_addr(self) -> Optional[str]:
        return self._request.remote_addr

    @property
    def headers(self) -> List[Tuple[str, str]]:
        """Request headers as ``(name, value)`` pairs."""
        return list(self._request.headers.items())

    def get_input_stream(self) -> BinaryIO:
        """Return the body stream, limited to the declared content length."""
        return self._request.stream

    def get_parameter_map(self) -> ParameterMap:
        """Return query string and form body parameters.

        Form bodies are parsed by werkzeug straight from the raw input
        stream, so a body parsed here never passes through a caching stream.
        """
        if self._parameter_map is None:
            params: Dict[str, List[Optional[str]]] = {}
            for source in (self._request.args, self._request.form):
                for name, values in source.lists():
                    params.setdefault(name, []).extend(values)
            self._parameter_map = params
        return self._parameter_map
