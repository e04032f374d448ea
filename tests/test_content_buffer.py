"""
Tests for the content buffer and the caching input stream.
"""

import io

from body_cache.caching import ContentBuffer, ContentCachingInputStream
from body_cache.caching.buffer import DEFAULT_CAPACITY


class TestContentBuffer:
    """Test the append-only content buffer."""

    def test_capacity_hint(self) -> None:
        """Test the capacity hint follows the declared length."""
        assert ContentBuffer(500).capacity_hint == 500
        assert ContentBuffer(-1).capacity_hint == DEFAULT_CAPACITY
        assert ContentBuffer().capacity_hint == DEFAULT_CAPACITY

    def test_starts_empty(self) -> None:
        """Test a new buffer holds nothing."""
        buffer = ContentBuffer(10)
        assert len(buffer) == 0
        assert not buffer
        assert buffer.snapshot() == b""

    def test_write_appends(self) -> None:
        """Test writes accumulate in order."""
        buffer = ContentBuffer()
        assert buffer.write(b"abc") == 3
        buffer.write(bytearray(b"de"))
        buffer.write(memoryview(b"f"))

        assert len(buffer) == 6
        assert buffer
        assert buffer.snapshot() == b"abcdef"

    def test_grows_past_capacity_hint(self) -> None:
        """Test the hint does not cap the buffer size."""
        buffer = ContentBuffer(2)
        buffer.write(b"more than two bytes")
        assert buffer.snapshot() == b"more than two bytes"

    def test_snapshot_is_immutable_copy(self) -> None:
        """Test snapshots are bytes detached from the buffer."""
        buffer = ContentBuffer()
        buffer.write(b"ab")
        snapshot = buffer.snapshot()
        buffer.write(b"cd")

        assert isinstance(snapshot, bytes)
        assert snapshot == b"ab"


class TestContentCachingInputStream:
    """Test the mirroring input stream."""

    def test_reads_are_mirrored(self) -> None:
        """Test each chunk read lands in the buffer."""
        buffer = ContentBuffer()
        stream = ContentCachingInputStream(io.BytesIO(b"hello world"), buffer)

        assert stream.read(5) == b"hello"
        assert buffer.snapshot() == b"hello"
        assert stream.read() == b" world"
        assert buffer.snapshot() == b"hello world"

    def test_readinto_mirrors(self) -> None:
        """Test readinto fills the caller's buffer and the cache."""
        buffer = ContentBuffer()
        stream = ContentCachingInputStream(io.BytesIO(b"xyz"), buffer)
        target = bytearray(8)

        assert stream.readinto(target) == 3
        assert bytes(target[:3]) == b"xyz"
        assert buffer.snapshot() == b"xyz"

    def test_end_of_stream(self) -> None:
        """Test empty reads return nothing and cache nothing."""
        buffer = ContentBuffer()
        stream = ContentCachingInputStream(io.BytesIO(b""), buffer)

        assert stream.read(4) == b""
        assert stream.readinto(bytearray(4)) == 0
        assert len(buffer) == 0

    def test_is_readable(self) -> None:
        """Test the stream advertises itself as readable only."""
        stream = ContentCachingInputStream(io.BytesIO(b""), ContentBuffer())
        assert stream.readable()
        assert not stream.writable()
        assert not stream.seekable()

    def test_iterates_lines(self) -> None:
        """Test line iteration works and caches every line."""
        buffer = ContentBuffer()
        stream = ContentCachingInputStream(io.BytesIO(b"a\nb\n"), buffer)

        assert list(stream) == [b"a\n", b"b\n"]
        assert buffer.snapshot() == b"a\nb\n"
