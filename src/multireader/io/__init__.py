"""I/O layer for multireader - byte sources and the readers that chain them."""

import inspect
import io
from contextlib import AsyncExitStack, ExitStack

# Re-export these for import convenience
from .base import ByteSource, AsyncByteSource, DEFAULT_CHUNK_SIZE
from .multi import MultiReader, AsyncMultiReader, _maybe_await
from .local import open_local_source, open_local_source_async
from .http_sync import open_http_source
from .http_async import open_http_source_async
from ..core.model import SourceOpenError


def _is_url(source) -> bool:
    return str(source).startswith(('http://', 'https://'))


def open_source(source):
    """Factory function to create the appropriate ByteSource for a path, URL or file-like object."""
    if hasattr(source, 'read'):  # BinaryIO
        return source

    if _is_url(source):
        return open_http_source(str(source))
    else:
        return open_local_source(source)


async def open_source_async(source):
    """Factory function to create the appropriate AsyncByteSource."""
    if inspect.iscoroutinefunction(getattr(source, "read", None)):  # already async
        return source

    if _is_url(source):
        return await open_http_source_async(str(source))
    else:
        return await open_local_source_async(source)


def open_multi_reader(sources, *, buffer_size: int = DEFAULT_CHUNK_SIZE):
    """Open every source and chain them into one readable stream.

    Returns a ``BufferedReader`` over a ``MultiReader``, or the bare
    ``MultiReader`` when `buffer_size` is 0. If any source fails to open,
    the ones already opened are closed again.
    """
    with ExitStack() as stack:
        opened = []
        for src in sources:
            try:
                source = open_source(src)
            except OSError as e:
                raise SourceOpenError(src, str(e)) from e
            if hasattr(source, 'close'):
                stack.callback(source.close)
            opened.append(source)
        reader = MultiReader(opened)
        stack.pop_all()

    if buffer_size:
        return io.BufferedReader(reader, buffer_size=buffer_size)
    return reader


async def open_multi_reader_async(sources) -> AsyncMultiReader:
    """Async counterpart of :func:`open_multi_reader`."""
    async with AsyncExitStack() as stack:
        opened = []
        for src in sources:
            try:
                source = await open_source_async(src)
            except OSError as e:
                raise SourceOpenError(src, str(e)) from e
            if hasattr(source, "close"):
                stack.push_async_callback(_maybe_await, source.close)
            opened.append(source)
        reader = AsyncMultiReader(opened)
        stack.pop_all()
    return reader
