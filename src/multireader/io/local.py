"""Local file sources."""

import asyncio
from pathlib import Path
from typing import BinaryIO, Union

from .base import ByteSource


def open_local_source(source: Union[Path, str, BinaryIO]) -> ByteSource:
    """Open a local path for binary reading; file-like objects are returned as-is."""
    if hasattr(source, "read"):
        return source
    return open(source, "rb")


class LocalAsyncByteSource:
    """Asynchronous local source - thin wrapper around a blocking binary file."""

    def __init__(self, source: Union[Path, str, BinaryIO]):
        self._should_close_file = not hasattr(source, "read")
        self._file = open_local_source(source)
        self.bytes_fetched = 0

    async def read(self, size: int = -1) -> bytes:
        """Return up to `size` bytes from the file, b"" at end of file."""
        data = await asyncio.to_thread(self._file.read, size)
        self.bytes_fetched += len(data)
        return data

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying file if we opened it."""
        if self._should_close_file and self._file is not None:
            await asyncio.to_thread(self._file.close)
            self._file = None


async def open_local_source_async(source: Union[Path, str, BinaryIO]) -> LocalAsyncByteSource:
    """Create an asynchronous local byte source."""
    return await asyncio.to_thread(LocalAsyncByteSource, source)
