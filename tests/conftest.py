"""
Pytest configuration and fixtures for body-cache.
"""

import io
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generator, List, Mapping, Optional, Sequence

import pytest

from body_cache.core.config import Config, Environment


class MockRequest:
    """In-memory ``HttpRequest`` used to drive the caching wrapper."""

    def __init__(
        self,
        body: bytes = b"",
        method: str = "GET",
        content_type: Optional[str] = None,
        character_encoding: Optional[str] = None,
        content_length: Optional[int] = None,
        parameters: Optional[Mapping[str, Sequence[Optional[str]]]] = None,
    ):
        self.body = body
        self.method = method
        self.content_type = content_type
        self.character_encoding = character_encoding
        self.content_length = len(body) if content_length is None else content_length
        self.parameters = parameters or {}
        self.stream = io.BytesIO(body)
        self.input_stream_calls = 0

    def get_input_stream(self) -> io.BytesIO:
        self.input_stream_calls += 1
        return self.stream

    def get_parameter_map(self) -> Mapping[str, Sequence[Optional[str]]]:
        return self.parameters


@pytest.fixture
def make_request() -> Callable[..., MockRequest]:
    return MockRequest


@pytest.fixture
def make_environ() -> Callable[..., Dict]:
    def _make_environ(
        body: bytes = b"",
        method: str = "GET",
        path: str = "/",
        query_string: str = "",
        content_type: Optional[str] = None,
        headers: Optional[List[tuple]] = None,
        content_length: Optional[int] = None,
    ) -> Dict:
        environ = {
            "REQUEST_METHOD": method,
            "SCRIPT_NAME": "",
            "PATH_INFO": path,
            "QUERY_STRING": query_string,
            "REMOTE_ADDR": "127.0.0.1",
            "SERVER_NAME": "localhost",
            "SERVER_PORT": "80",
            "SERVER_PROTOCOL": "HTTP/1.1",
            "wsgi.version": (1, 0),
            "wsgi.url_scheme": "http",
            "wsgi.input": io.BytesIO(body),
            "wsgi.errors": io.StringIO(),
            "wsgi.multithread": False,
            "wsgi.multiprocess": False,
            "wsgi.run_once": False,
        }
        if body or content_length is not None:
            length = len(body) if content_length is None else content_length
            environ["CONTENT_LENGTH"] = str(length)
        if content_type:
            environ["CONTENT_TYPE"] = content_type
        for name, value in headers or []:
            environ["HTTP_" + name.upper().replace("-", "_")] = value
        return environ

    return _make_environ


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    path = Path(tempfile.mkdtemp())
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def test_config() -> Config:
    return Config(environment=Environment.TESTING)
