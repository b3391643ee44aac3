import json

import pytest
from typer.testing import CliRunner

from multireader.cli import app


class TestCLIURL:
    """Test the CLI functionality with remote URLs."""

    @pytest.fixture
    def runner(self):
        """CLI test runner."""
        return CliRunner()

    def test_count_remote_and_local(self, runner, httpserver, tmp_path):
        """Test counting lines across a URL and a local file."""
        httpserver.expect_request("/remote.txt").respond_with_data(b"one\ntwo\n")
        local = tmp_path / "local.txt"
        local.write_bytes(b"three\n")

        result = runner.invoke(app, ["count", httpserver.url_for("/remote.txt"), str(local)])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["lines"] == 3

    def test_cat_remote_async(self, runner, httpserver):
        """Test async cat over two URLs."""
        httpserver.expect_request("/a").respond_with_data(b"first ")
        httpserver.expect_request("/b").respond_with_data(b"second")

        result = runner.invoke(app, ["cat", "--async", httpserver.url_for("/a"), httpserver.url_for("/b")])

        assert result.exit_code == 0
        assert result.stdout_bytes == b"first second"

    def test_remote_error_status(self, runner, httpserver):
        """Test a 404 fails the run."""
        httpserver.expect_request("/gone").respond_with_data(b"", status=404)

        result = runner.invoke(app, ["count", httpserver.url_for("/gone")])

        assert result.exit_code == 1
        assert json.loads(result.stdout)["success"] is False
