"""Tests for process utilities."""

import subprocess

import pytest

from checkzpool.lib.process import CommandError, run_command


class TestRunCommand:
    """Tests for run_command function."""

    def test_runs_simple_command(self, mock_context):
        """Runs command and returns output."""
        ctx = mock_context(command_outputs={("echo", "hello"): "hello\n"})

        assert run_command(["echo", "hello"], context=ctx) == "hello\n"

    def test_nonzero_exit_returns_output(self, mock_context):
        """Non-zero exit status is returned to the caller as output."""
        ctx = mock_context(command_outputs={
            ("zpool", "list", "x"): subprocess.CompletedProcess(
                ["zpool", "list", "x"], returncode=1, stdout="", stderr="no such pool"
            ),
        })

        assert run_command(["zpool", "list", "x"], context=ctx) == ""

    def test_missing_binary_raises(self, mock_context):
        """Raises CommandError when the binary cannot be started."""
        ctx = mock_context(command_outputs={
            ("/sbin/zpool", "list"): FileNotFoundError(2, "No such file or directory"),
        })

        with pytest.raises(CommandError, match="Command failed") as exc_info:
            run_command(["/sbin/zpool", "list"], context=ctx)

        assert exc_info.value.command_line == "/sbin/zpool list"

    def test_permission_denied_raises(self, mock_context):
        ctx = mock_context(command_outputs={
            ("/sbin/zpool", "status"): PermissionError(13, "Permission denied"),
        })

        with pytest.raises(CommandError, match="Permission denied"):
            run_command(["/sbin/zpool", "status"], context=ctx)

    def test_timeout_raises(self, mock_context):
        ctx = mock_context(command_outputs={
            ("/sbin/zpool", "status"): subprocess.TimeoutExpired(["/sbin/zpool", "status"], 5),
        })

        with pytest.raises(CommandError, match="timed out after 5s"):
            run_command(["/sbin/zpool", "status"], context=ctx, timeout=5)

    def test_default_context_runs_real_command(self):
        assert run_command(["echo", "hello"]).strip() == "hello"
