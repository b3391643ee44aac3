"""Synchronous streaming HTTP source using requests."""

import logging

import requests

from .base import HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT

logger = logging.getLogger(__name__)

# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class HTTPByteSource:
    """Streams the body of one GET response, read through ``readinto``."""

    def __init__(self, url: str, *, timeout=(HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT)):
        self.url = url
        self.bytes_fetched = 0
        self.content_length: int | None = None
        self._session = _get_session()

        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, stream=True, timeout=timeout)
        except requests.RequestException as e:
            raise IOError(f"GET request failed: {e}")

        if response.status_code >= 400:
            response.close()
            raise IOError(f"GET request failed with status {response.status_code}")

        content_length_header = response.headers.get("content-length")
        if content_length_header:
            self.content_length = int(content_length_header)

        # Undo any Content-Encoding so callers see the entity body
        response.raw.decode_content = True
        self._response = response

    def readinto(self, buffer) -> int:
        """Fill `buffer` from the response body; 0 once the body is consumed."""
        if self._response is None:
            raise ValueError("I/O operation on closed HTTPByteSource")
        n = self._response.raw.readinto(buffer)
        self.bytes_fetched += n
        return n

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Release the connection back to the shared session."""
        if self._response is not None:
            self._response.close()
            self._response = None


def open_http_source(url: str) -> HTTPByteSource:
    """Create a synchronous HTTP byte source."""
    return HTTPByteSource(url)
