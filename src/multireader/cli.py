"""CLI implementation for multireader."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from .core.model import CountResult
from .core.util import count_lines, copy_stream, result_asdict
from .io import DEFAULT_CHUNK_SIZE, open_multi_reader, open_multi_reader_async
from .io.http_async import close_global_client

app = typer.Typer(add_completion=False, help="Read many files and URLs as one byte stream.")

CHAINED = "<chained>"
TOTAL = "<total>"


def iter_sources(files: list[str]) -> list[str]:
    """Get list of sources from files argument or stdin."""
    if "-" in files:
        # stdin mode
        return [ln.strip() for ln in sys.stdin if ln.strip()]
    elif files:
        return list(files)
    return []


def _require_sources(files: Optional[list[str]]) -> list[str]:
    sources = iter_sources(files or [])
    if not sources:
        typer.echo("No input files given.", err=True)
        raise typer.Exit(code=1)
    return sources


def _count(sources: list[str], label: str) -> CountResult:
    try:
        with open_multi_reader(sources) as stream:
            lines, size = count_lines(stream)
    except Exception as e:
        return CountResult(success=False, source=label, error=str(e))
    return CountResult(success=True, source=label, lines=lines, bytes_read=size)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log source transitions to stderr"),
):
    """Read many files and URLs as one byte stream."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


@app.command()
def count(
    files: list[str] = typer.Argument(None, help="Files or URLs to process, or '-' for stdin"),
    separate: bool = typer.Option(False, "--separate", help="Count each source on its own instead of chaining them"),
    jsonl: bool = typer.Option(False, "--jsonl", help="Force JSON-lines output"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
):
    """Count lines across all sources.

    Chained mode reads every source through one stream, so a source that
    does not end in a newline runs into the first line of the next one.
    """
    sources = _require_sources(files)

    results: list[CountResult] = []
    if separate:
        results = [_count([src], src) for src in sources]
        results.append(CountResult(
            success=all(r.success for r in results),
            source=TOTAL,
            lines=sum(r.lines for r in results),
            bytes_read=sum(r.bytes_read for r in results),
        ))
    else:
        results.append(_count(sources, CHAINED))

    # open output sink
    sink = open(output, "w", encoding="utf-8") if output else sys.stdout
    try:
        if len(results) == 1 and not jsonl:
            json.dump(result_asdict(results[0]), sink, indent=2)
            sink.write("\n")
        else:
            for res in results:
                sink.write(json.dumps(result_asdict(res)))
                sink.write("\n")
    finally:
        if output:
            sink.close()

    # exit code
    if any(not r.success for r in results):
        raise typer.Exit(code=1)


async def _cat_async(sources: list[str], sink, chunk_size: int) -> int:
    total = 0
    try:
        async with await open_multi_reader_async(sources) as reader:
            async for chunk in reader.iter_chunks(chunk_size):
                sink.write(chunk)
                total += len(chunk)
    finally:
        await close_global_client()
    return total


@app.command()
def cat(
    files: list[str] = typer.Argument(None, help="Files or URLs to concatenate, or '-' for stdin"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    use_async: bool = typer.Option(False, "--async", help="Read sources with asynchronous I/O"),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, "--chunk-size", min=1, help="Bytes per read"),
):
    """Write the concatenation of all sources."""
    sources = _require_sources(files)

    sink = open(output, "wb") if output else typer.get_binary_stream("stdout")
    try:
        if use_async:
            asyncio.run(_cat_async(sources, sink, chunk_size))
        else:
            with open_multi_reader(sources, buffer_size=0) as reader:
                copy_stream(reader, sink, chunk_size)
        sink.flush()
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        if output:
            sink.close()


if __name__ == "__main__":
    app()
