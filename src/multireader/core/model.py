from __future__ import annotations
from dataclasses import dataclass


@dataclass(slots=True)
class CountResult:
    success: bool
    source: str
    lines: int = 0
    bytes_read: int = 0
    error: str | None = None


class SourceOpenError(RuntimeError):
    """Raised when a source cannot be opened for reading."""

    def __init__(self, source, reason: str):
        super().__init__(f"Cannot open {source!s}: {reason}")
        self.source = source
