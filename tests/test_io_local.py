"""Tests for local file I/O."""

import pytest
import tempfile
from pathlib import Path
import io

from multireader.io.local import LocalAsyncByteSource, open_local_source, open_local_source_async
from multireader.io.multi import AsyncMultiReader, MultiReader


class TestLocalSource:
    """Test synchronous local sources."""

    def test_path_string(self):
        """Test opening a path string."""
        test_data = b"0123456789"

        with tempfile.NamedTemporaryFile() as f:
            f.write(test_data)
            f.flush()

            source = open_local_source(f.name)
            buf = bytearray(4)
            assert source.readinto(buf) == 4
            assert buf == b"0123"
            source.close()

    def test_path_object(self):
        """Test opening a Path object."""
        test_data = b"0123456789"

        with tempfile.NamedTemporaryFile(delete=False) as f:
            f.write(test_data)
            f.flush()
            temp_path = Path(f.name)

        try:
            with open_local_source(temp_path) as source:
                assert source.read() == test_data
        finally:
            temp_path.unlink()

    def test_binary_io_passthrough(self):
        """Test a file-like object is returned unchanged."""
        bio = io.BytesIO(b"0123456789")
        assert open_local_source(bio) is bio

    def test_missing_file(self):
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            open_local_source("/nonexistent/path/to/file")

    def test_files_through_multi_reader(self):
        """Test chaining real files."""
        with tempfile.NamedTemporaryFile() as a, tempfile.NamedTemporaryFile() as b:
            a.write(b"first\n")
            a.flush()
            b.write(b"second\n")
            b.flush()

            with MultiReader([open_local_source(a.name), open_local_source(b.name)]) as reader:
                assert reader.read() == b"first\nsecond\n"


class TestLocalAsyncByteSource:
    """Test asynchronous local sources."""

    @pytest.mark.asyncio
    async def test_basic_read(self):
        """Test basic async reads."""
        test_data = b"0123456789"

        with tempfile.NamedTemporaryFile() as f:
            f.write(test_data)
            f.flush()

            source = LocalAsyncByteSource(f.name)

            assert await source.read(5) == b"01234"
            assert await source.read(3) == b"567"
            assert await source.read() == b"89"
            assert await source.read(5) == b""

            # Check bytes_fetched accounting
            assert source.bytes_fetched == 10

            await source.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        """Test async context manager usage."""
        test_data = b"0123456789"

        with tempfile.NamedTemporaryFile() as f:
            f.write(test_data)
            f.flush()

            async with LocalAsyncByteSource(f.name) as source:
                assert await source.read(5) == b"01234"
                assert source.bytes_fetched == 5

    @pytest.mark.asyncio
    async def test_binary_io_not_closed(self):
        """Test a caller-supplied file object is left open."""
        bio = io.BytesIO(b"abc")
        source = LocalAsyncByteSource(bio)

        assert await source.read() == b"abc"
        await source.close()
        assert not bio.closed

    @pytest.mark.asyncio
    async def test_open_local_source_async(self):
        """Test async factory function."""
        test_data = b"0123456789"

        with tempfile.NamedTemporaryFile() as f:
            f.write(test_data)
            f.flush()

            source = await open_local_source_async(f.name)
            assert isinstance(source, LocalAsyncByteSource)
            async with AsyncMultiReader([source, LocalAsyncByteSource(io.BytesIO(b"!"))]) as reader:
                assert await reader.read() == b"0123456789!"
