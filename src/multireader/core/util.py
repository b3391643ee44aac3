from __future__ import annotations
from dataclasses import asdict
from typing import Any, BinaryIO, Dict

from .model import CountResult
from ..io.base import DEFAULT_CHUNK_SIZE


def count_lines(stream: BinaryIO) -> tuple[int, int]:
    """Return (lines, bytes) for a binary stream read to the end.

    A trailing segment without a newline counts as a line.
    """
    lines = 0
    size = 0
    for line in stream:
        lines += 1
        size += len(line)
    return lines, size


def copy_stream(src: BinaryIO, dst: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """Copy `src` into `dst` until EOF and return the number of bytes copied."""
    total = 0
    while chunk := src.read(chunk_size):
        dst.write(chunk)
        total += len(chunk)
    return total


def result_asdict(res: CountResult) -> Dict[str, Any]:
    """Return a JSON-serialisable dict (skip None)."""
    return {k: v for k, v in asdict(res).items() if v is not None}
