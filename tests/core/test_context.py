"""Tests for Context execution wrapper."""

import platform
import socket

from checkzpool.core.context import Context


class TestContext:
    """Tests for execution context."""

    def test_run_executes_command(self):
        """run() executes command and returns result."""
        result = Context().run(["echo", "hello"])
        assert result.returncode == 0
        assert "hello" in result.stdout

    def test_run_captures_stderr(self):
        """run() captures stderr output."""
        result = Context().run(["ls", "/nonexistent_path_xyz"], check=False)
        assert result.returncode != 0
        assert result.stderr

    def test_hostname_is_short(self):
        """hostname() drops the domain part."""
        assert Context().hostname() == socket.gethostname().split(".")[0]

    def test_system(self):
        assert Context().system() == platform.system()
