"""Output helper producing the plugin status line."""

import json
import sys
from typing import Any, TextIO

from checkzpool.core.states import Severity


class Output:
    """
    Helper for probe output.

    Collects the verdict, structured data for JSON output and notices for
    stderr, then prints everything once in render().
    """

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None):
        self.data: dict[str, Any] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.severity: Severity | None = None
        self.message: str | None = None
        self.bare: bool = False
        self._stdout = stdout
        self._stderr = stderr
        self._printed: bool = False

    def emit(self, data: dict[str, Any]) -> None:
        """Store structured output data."""
        self.data.update(data)

    def error(self, message: str) -> None:
        """Record an error notice for stderr."""
        self.errors.append(message)

    def warning(self, message: str) -> None:
        """Record a warning notice for stderr."""
        self.warnings.append(message)

    def set_verdict(self, severity: Severity, message: str) -> None:
        """Set the final state and status message."""
        self.severity = severity
        self.message = message

    def set_usage(self, usage: str) -> None:
        """Report a command-line error: UNKNOWN, printed without a state prefix."""
        self.set_verdict(Severity.UNKNOWN, usage)
        self.bare = True

    @property
    def summary(self) -> str:
        """The status line: '<SEVERITY> <message>'."""
        if self.severity is None:
            return ""
        return f"{self.severity.name} {self.message}"

    @property
    def exit_code(self) -> int:
        """Exit code for the recorded verdict; UNKNOWN if none was set."""
        if self.severity is None:
            return Severity.UNKNOWN.exit_code
        return self.severity.exit_code

    def to_json(self) -> str:
        """Return verdict and data as JSON string."""
        payload = {
            "severity": self.severity.name if self.severity else None,
            "exit_code": self.exit_code,
            "message": self.message,
            **self.data,
        }
        return json.dumps(payload, indent=2, default=str)

    def to_plain(self) -> str:
        """Return the single plugin output line."""
        if self.bare:
            return self.message
        return self.summary

    def render(self, format: str = "plain") -> None:
        """Print output in the specified format.

        Notices always go to stderr. In plain format stdout gets exactly one
        line; in json format a single JSON document.

        Args:
            format: Output format - "json" or "plain"
        """
        if self._printed:
            return
        self._printed = True

        stdout = self._stdout or sys.stdout
        stderr = self._stderr or sys.stderr

        for notice in self.errors + self.warnings:
            print(notice, file=stderr)

        if self.severity is None:
            return

        if format == "json":
            print(self.to_json(), file=stdout)
        else:
            print(self.to_plain(), file=stdout)
