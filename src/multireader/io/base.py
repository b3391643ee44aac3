"""Base protocols and shared constants for the I/O layer."""

import io
from typing import Protocol, runtime_checkable


DEFAULT_CHUNK_SIZE = io.DEFAULT_BUFFER_SIZE

HTTP_CONNECT_TIMEOUT = 30  # seconds
HTTP_READ_TIMEOUT = 60  # seconds


@runtime_checkable
class ByteSource(Protocol):
    """Protocol for synchronous readable byte sources."""

    def readinto(self, buffer) -> int | None:
        """Fill `buffer` with the next available bytes and return the count.
        0 means the source is exhausted; None means no data is ready yet.
        """
        ...


@runtime_checkable
class AsyncByteSource(Protocol):
    """Protocol for asynchronous readable byte sources."""

    async def read(self, size: int = -1) -> bytes:
        """Return up to `size` bytes; b"" once the source is exhausted."""
        ...
