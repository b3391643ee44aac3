"""multireader - read many byte sources back to back as one stream."""

from .core.model import CountResult, SourceOpenError                  # re-export
from .io import (                                                     # re-export
    AsyncMultiReader,
    MultiReader,
    open_multi_reader,
    open_multi_reader_async,
    open_source,
    open_source_async,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncMultiReader",
    "CountResult",
    "MultiReader",
    "SourceOpenError",
    "open_multi_reader",
    "open_multi_reader_async",
    "open_source",
    "open_source_async",
]
