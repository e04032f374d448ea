"""
Append-only in-memory buffer for request body content.
"""

from typing import Union

# Capacity hint used when the request does not declare its length
DEFAULT_CAPACITY = 1024


class ContentBuffer:
    """Growable byte buffer that only ever appends.

    ``capacity_hint`` records the size the buffer expects to reach: the
    declared content length when known, ``DEFAULT_CAPACITY`` otherwise.
    """

    def __init__(self, content_length: int = -1):
        self.capacity_hint = content_length if content_length >= 0 else DEFAULT_CAPACITY
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def write(self, data: Union[bytes, bytearray, memoryview]) -> int:
        """Append ``data`` and return the number of bytes written."""
        self._data += data
        return len(data)

    def snapshot(self) -> bytes:
        """Return an immutable copy of the current contents."""
        return bytes(self._data)
