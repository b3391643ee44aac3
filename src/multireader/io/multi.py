"""Composite readers that expose many byte sources as one stream."""

from __future__ import annotations

import inspect
import io
import logging
from typing import AsyncIterator, Iterable

from .base import AsyncByteSource, ByteSource, DEFAULT_CHUNK_SIZE

logger = logging.getLogger(__name__)


def _readinto(source, view: memoryview) -> int | None:
    """Delegate one read to `source`, falling back to read() for sources without readinto()."""
    if hasattr(source, "readinto"):
        return source.readinto(view)
    data = source.read(len(view))
    if data is None:
        return None
    n = len(data)
    view[:n] = data
    return n


class MultiReader(io.RawIOBase):
    """Read an ordered list of byte sources back to back as a single stream.

    Each source is drained until it reports exhaustion (a zero-length read)
    before the next one is touched. The reader is itself a raw binary stream,
    so it can be wrapped in ``io.BufferedReader`` or chained into another
    ``MultiReader``.

    Sources are owned by the reader: closing it closes them, unless
    ``close_sources=False`` is passed.
    """

    def __init__(self, sources: Iterable[ByteSource], *, close_sources: bool = True):
        super().__init__()
        self._sources = list(sources)
        self._cursor = 0
        self._close_sources = close_sources

    @property
    def cursor(self) -> int:
        """Index of the source currently being drained."""
        return self._cursor

    @property
    def sources(self) -> tuple:
        return tuple(self._sources)

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._sources)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int | None:
        if self.closed:
            raise ValueError("I/O operation on closed MultiReader")

        view = memoryview(buffer).cast("B")
        while self._cursor < len(self._sources):
            n = _readinto(self._sources[self._cursor], view)
            # An empty buffer reads zero bytes without telling us anything
            if len(view) == 0:
                return 0
            # None is a non-blocking source with nothing ready yet
            if n is None or n > 0:
                return n
            logger.debug("source %d of %d exhausted", self._cursor + 1, len(self._sources))
            self._cursor += 1
        return 0

    def close(self) -> None:
        if self.closed:
            return
        try:
            if self._close_sources:
                _close_all(self._sources)
        finally:
            super().close()


def _close_all(sources) -> None:
    """Close every source that can be closed, in order; the first error is re-raised once all have been tried."""
    first_error = None
    for source in sources:
        if not hasattr(source, "close"):
            continue
        try:
            source.close()
        except Exception as e:
            logger.debug("closing %r failed: %s", source, e)
            if first_error is None:
                first_error = e
    logger.debug("closed %d sources", len(sources))
    if first_error is not None:
        raise first_error


class AsyncMultiReader:
    """Asynchronous counterpart of :class:`MultiReader`.

    Sources expose ``async read(size)``; an empty result from a source means
    it is exhausted and the reader moves on to the next one.
    """

    def __init__(self, sources: Iterable[AsyncByteSource], *, close_sources: bool = True):
        self._sources = list(sources)
        self._cursor = 0
        self._close_sources = close_sources
        self._closed = False

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def sources(self) -> tuple:
        return tuple(self._sources)

    @property
    def exhausted(self) -> bool:
        return self._cursor >= len(self._sources)

    @property
    def closed(self) -> bool:
        return self._closed

    async def read(self, size: int = -1) -> bytes:
        """Return up to `size` bytes, or everything left when `size` is negative."""
        if self._closed:
            raise ValueError("I/O operation on closed AsyncMultiReader")
        if size is None or size < 0:
            return await self.readall()

        while self._cursor < len(self._sources):
            data = await self._sources[self._cursor].read(size)
            if size == 0:
                return b""
            if data:
                return data
            logger.debug("source %d of %d exhausted", self._cursor + 1, len(self._sources))
            self._cursor += 1
        return b""

    async def readall(self) -> bytes:
        chunks = []
        while chunk := await self.read(DEFAULT_CHUNK_SIZE):
            chunks.append(chunk)
        return b"".join(chunks)

    async def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
        """Yield chunks of at most `chunk_size` bytes until every source is exhausted."""
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        while chunk := await self.read(chunk_size):
            yield chunk

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if not self._close_sources:
            return
        first_error = None
        for source in self._sources:
            close = getattr(source, "aclose", None) or getattr(source, "close", None)
            if close is None:
                continue
            try:
                await _maybe_await(close)
            except Exception as e:
                logger.debug("closing %r failed: %s", source, e)
                if first_error is None:
                    first_error = e
        logger.debug("closed %d sources", len(self._sources))
        if first_error is not None:
            raise first_error

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


async def _maybe_await(close) -> None:
    result = close()
    if inspect.isawaitable(result):
        await result
