"""
Request logging middleware for WSGI and ASGI applications.

Logs a message before the application handles a request and another once the
response is complete. The after-request message can carry the request body,
captured while the application read it, so the body is logged without being
consumed ahead of the application.
"""

import time
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..caching.buffer import ContentBuffer
from ..caching.request_wrapper import ContentCachingRequestWrapper
from ..core.config import RequestLoggingConfig
from ..core.encoding import charset_from_content_type
from ..core.exceptions import ContentReconstructionError
from ..core.logging import (
    clear_request_context,
    generate_request_id,
    get_logger,
    set_request_context,
)
from .wsgi import WSGIRequest

# Environ key under which the caching wrapper is published to the application
ENVIRON_KEY = "body_cache.request"

UNKNOWN_PAYLOAD = "[unknown]"


def render_payload(content: bytes, encoding: str, max_length: int) -> str:
    """Decode at most ``max_length`` bytes of ``content`` for a log message."""
    try:
        return content[:max_length].decode(encoding, errors="replace")
    except LookupError:
        return UNKNOWN_PAYLOAD


def build_request_message(
    config: RequestLoggingConfig,
    prefix: str,
    suffix: str,
    path: str,
    query_string: str = "",
    client: Optional[str] = None,
    headers: Optional[List[Tuple[str, str]]] = None,
    payload: Optional[str] = None,
) -> str:
    """Build a request log message.

    Query string, client address, headers and payload are only included when
    enabled in ``config``; the payload must already be rendered.
    """
    msg = [prefix, "uri=", path]
    if config.include_query_string and query_string:
        msg.append("?" + query_string)
    if config.include_client_info and client:
        msg.append(";client=" + client)
    if config.include_headers and headers is not None:
        rendered = ", ".join(f'{name}:"{value}"' for name, value in headers)
        msg.append(";headers=[" + rendered + "]")
    if config.include_payload and payload:
        msg.append(";payload=" + payload)
    msg.append(suffix)
    return "".join(msg)


class _LoggedResponse:
    """Response iterable that runs ``on_close`` once the server closes it.

    Closing works whether or not iteration started, so a response the server
    drops unread still has the application's iterable closed.
    """

    def __init__(self, result: Iterable[bytes], on_close: Callable[[], None]):
        self._result = result
        self._on_close = on_close
        self._closed = False

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._result)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            close = getattr(self._result, "close", None)
            if close is not None:
                close()
        finally:
            self._on_close()


class RequestLoggingMiddleware:
    """WSGI middleware that logs requests along with their cached body.

    The request is wrapped in a ``ContentCachingRequestWrapper`` whose stream
    replaces ``wsgi.input``; the wrapper itself is available to the
    application as ``environ["body_cache.request"]``.
    """

    def __init__(self, app: Callable, config: Optional[RequestLoggingConfig] = None):
        self.app = app
        self.config = config or RequestLoggingConfig()
        self.logger = get_logger("body_cache.middleware")

    def __call__(self, environ: Dict[str, Any], start_response: Callable) -> Iterable[bytes]:
        set_request_context(request_id=generate_request_id())

        request = WSGIRequest(environ)
        wrapper = ContentCachingRequestWrapper(
            request, default_encoding=self.config.default_encoding
        )
        environ["wsgi.input"] = wrapper.get_input_stream()
        environ[ENVIRON_KEY] = wrapper

        self.logger.info(self._create_message(request, wrapper, before=True))

        status: Dict[str, Optional[int]] = {"code": None}

        def _start_response(status_line: str, headers: List, exc_info: Any = None) -> Any:
            status["code"] = int(status_line.split(" ", 1)[0])
            if exc_info is not None:
                return start_response(status_line, headers, exc_info)
            return start_response(status_line, headers)

        start_time = time.time()
        try:
            result = self.app(environ, _start_response)
        except Exception as e:
            self.logger.error(
                "Request failed",
                method=request.method,
                path=request.path,
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
                error_type=type(e).__name__,
            )
            clear_request_context()
            raise

        return _LoggedResponse(
            result,
            lambda: self._log_after(request, wrapper, status["code"], start_time),
        )

    def _log_after(
        self,
        request: WSGIRequest,
        wrapper: ContentCachingRequestWrapper,
        status_code: Optional[int],
        start_time: float,
    ) -> None:
        try:
            self.logger.info(
                self._create_message(request, wrapper, before=False),
                status_code=status_code,
                duration_ms=(time.time() - start_time) * 1000,
            )
        finally:
            clear_request_context()

    def _create_message(
        self,
        request: WSGIRequest,
        wrapper: ContentCachingRequestWrapper,
        before: bool,
    ) -> str:
        config = self.config
        payload = None
        if not before and config.include_payload:
            payload = self._render_wrapper_payload(wrapper)
        return build_request_message(
            config,
            config.before_message_prefix if before else config.after_message_prefix,
            config.before_message_suffix if before else config.after_message_suffix,
            path=request.path,
            query_string=request.query_string,
            client=request.remote_addr,
            headers=request.headers,
            payload=payload,
        )

    def _render_wrapper_payload(self, wrapper: ContentCachingRequestWrapper) -> str:
        try:
            content = wrapper.get_content_as_bytes()
        except ContentReconstructionError as e:
            self.logger.warning("Request payload unavailable", error=str(e))
            return UNKNOWN_PAYLOAD
        return render_payload(
            content, wrapper.character_encoding, self.config.max_payload_length
        )


class ASGIRequestLoggingMiddleware:
    """ASGI middleware that logs HTTP requests along with their body.

    Body chunks received by the application are mirrored into a
    ``ContentBuffer``; non-HTTP scopes pass straight through.
    """

    def __init__(self, app: ASGIApp, config: Optional[RequestLoggingConfig] = None):
        self.app = app
        self.config = config or RequestLoggingConfig()
        self.logger = get_logger("body_cache.middleware")

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        set_request_context(request_id=generate_request_id())

        headers = Headers(scope=scope)
        try:
            content_length = int(headers.get("content-length", -1))
        except ValueError:
            content_length = -1
        buffer = ContentBuffer(content_length)
        status_code: Optional[int] = None

        async def caching_receive() -> Message:
            message = await receive()
            if message["type"] == "http.request":
                body = message.get("body", b"")
                if body:
                    buffer.write(body)
            return message

        async def logging_send(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        self.logger.info(self._create_message(scope, headers, None, before=True))

        start_time = time.time()
        try:
            await self.app(scope, caching_receive, logging_send)
        except Exception as e:
            self.logger.error(
                "Request failed",
                method=scope.get("method"),
                path=scope.get("path"),
                duration_ms=(time.time() - start_time) * 1000,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise
        else:
            self.logger.info(
                self._create_message(scope, headers, buffer, before=False),
                status_code=status_code,
                duration_ms=(time.time() - start_time) * 1000,
            )
        finally:
            clear_request_context()

    def _create_message(
        self,
        scope: Scope,
        headers: Headers,
        buffer: Optional[ContentBuffer],
        before: bool,
    ) -> str:
        config = self.config
        payload = None
        if buffer is not None and config.include_payload:
            encoding = (
                charset_from_content_type(headers.get("content-type"))
                or config.default_encoding
            )
            payload = render_payload(
                buffer.snapshot(), encoding, config.max_payload_length
            )

        client = scope.get("client")
        return build_request_message(
            config,
            config.before_message_prefix if before else config.after_message_prefix,
            config.before_message_suffix if before else config.after_message_suffix,
            path=scope.get("path", ""),
            query_string=scope.get("query_string", b"").decode("latin-1"),
            client=client[0] if client else None,
            headers=list(headers.items()),
            payload=payload,
        )
