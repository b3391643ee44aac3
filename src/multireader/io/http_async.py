"""Asynchronous streaming HTTP source using httpx."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx

from .base import HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT

logger = logging.getLogger(__name__)

# Global async client
_client: Optional[httpx.AsyncClient] = None


@asynccontextmanager
async def _get_client():
    """Get or create the global httpx AsyncClient."""
    global _client
    if _client is None:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT)
        )

    try:
        yield _client
    finally:
        # Don't close the client here - it's shared
        pass


class HTTPAsyncByteSource:
    """Streams the body of one GET response, read in caller-sized pieces."""

    def __init__(self, url: str):
        self.url = url
        self.bytes_fetched = 0
        self.content_length: Optional[int] = None
        self._response: Optional[httpx.Response] = None
        self._chunks = None
        self._pending = b""
        self._eof = False
        self._closed = False
        self._error: Optional[Exception] = None

    async def _ensure_open(self):
        """Send the GET request if not already done."""
        if self._closed:
            raise ValueError("I/O operation on closed HTTPAsyncByteSource")
        if self._response is not None:
            return

        async with _get_client() as client:
            logger.debug("GET %s", self.url)
            try:
                request = client.build_request("GET", self.url)
                response = await client.send(request, stream=True)
            except httpx.RequestError as e:
                raise IOError(f"GET request failed: {e}")

        if response.status_code >= 400:
            await response.aclose()
            raise IOError(f"GET request failed with status {response.status_code}")

        content_length_header = response.headers.get("content-length")
        if content_length_header:
            self.content_length = int(content_length_header)

        self._response = response
        self._chunks = response.aiter_bytes()

    async def read(self, size: int = -1) -> bytes:
        """Return up to `size` bytes of the body, or the rest of it when `size` is negative."""
        await self._ensure_open()
        # A broken body stream cannot be resumed, so every later read fails too
        if self._error is not None:
            raise self._error

        if size is None or size < 0:
            parts = [self._pending]
            try:
                async for chunk in self._chunks:
                    parts.append(chunk)
            except httpx.HTTPError as e:
                self._fail(e)
            self._pending = b""
            self._eof = True
            data = b"".join(parts)
        elif size == 0:
            return b""
        else:
            while not self._pending and not self._eof:
                try:
                    self._pending = await self._chunks.__anext__()
                except StopAsyncIteration:
                    self._eof = True
                except httpx.HTTPError as e:
                    self._fail(e)
            data, self._pending = self._pending[:size], self._pending[size:]

        self.bytes_fetched += len(data)
        return data

    def _fail(self, cause: Exception):
        self._error = IOError(f"GET body read failed: {cause}")
        raise self._error from cause

    async def __aenter__(self):
        await self._ensure_open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the response; the client is shared and stays open."""
        self._closed = True
        if self._response is not None:
            await self._response.aclose()
            self._response = None
            self._chunks = None


async def open_http_source_async(url: str) -> HTTPAsyncByteSource:
    """Create an asynchronous HTTP byte source."""
    source = HTTPAsyncByteSource(url)
    await source._ensure_open()
    return source


async def close_global_client():
    """Close the global httpx client. Call this at application shutdown."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
