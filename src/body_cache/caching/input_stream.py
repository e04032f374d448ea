"""
Byte stream that mirrors everything it reads into a ContentBuffer.
"""

import io
from typing import Any, BinaryIO

from .buffer import ContentBuffer


class ContentCachingInputStream(io.RawIOBase):
    """Readable raw stream over a request body.

    Each chunk pulled from the underlying stream is appended to ``buffer``
    before it reaches the caller. End of stream appends nothing.
    """

    def __init__(self, stream: BinaryIO, buffer: ContentBuffer):
        super().__init__()
        self._stream = stream
        self._buffer = buffer

    def readable(self) -> bool:
        return True

    def readinto(self, b: Any) -> int:
        view = memoryview(b).cast("B")
        data = self._stream.read(len(view))
        if not data:
            return 0
        n = len(data)
        self._buffer.write(data)
        view[:n] = data
        return n
