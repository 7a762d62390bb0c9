"""Process utilities for the probe."""

import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from checkzpool.core.context import Context


class CommandError(Exception):
    """A command could not be started or did not finish."""

    def __init__(self, cmd: list[str], reason: str):
        self.cmd = cmd
        self.reason = reason
        super().__init__(f"Command failed: {' '.join(cmd)}: {reason}")

    @property
    def command_line(self) -> str:
        """Command as a single shell-like string."""
        return " ".join(self.cmd)


def run_command(
    cmd: list[str],
    context: "Context | None" = None,
    timeout: int | None = 60,
) -> str:
    """
    Run a command and return its output.

    A non-zero exit status is not an error here: zpool reports a missing
    pool that way, and callers decide from the output what it means.

    Args:
        cmd: Command and arguments
        context: Execution context (for testing)
        timeout: Timeout in seconds

    Returns:
        Command stdout

    Raises:
        CommandError: If the command cannot be started or times out
    """
    if context is None:
        from checkzpool.core.context import Context
        context = Context()

    try:
        result = context.run(cmd, check=False, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        raise CommandError(cmd, f"timed out after {e.timeout}s") from e
    except (OSError, subprocess.SubprocessError) as e:
        raise CommandError(cmd, str(e)) from e
    return result.stdout or ""
