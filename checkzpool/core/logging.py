"""JSONL logging for probe runs."""

import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any


SCRIPT_NAME = "check_zpool"


def get_log_path(base_path: Path, script_name: str = SCRIPT_NAME) -> Path:
    """
    Get the log file path for a run.

    Args:
        base_path: Base directory for logs
        script_name: Name used for the log file

    Returns:
        Path to the log file: {base}/{date}/{script}.jsonl
    """
    today = date.today().isoformat()
    return base_path / today / f"{script_name}.jsonl"


class ScriptLogger:
    """
    JSONL logger for probe execution.

    Writes structured log entries to a JSONL file. With no log path the
    logger is disabled and every call is a no-op, so the probe can log
    unconditionally. A log file that cannot be created disables the logger
    and leaves the reason in `failure`; logging never aborts a run.
    """

    def __init__(self, script_name: str = SCRIPT_NAME, log_path: Path | None = None):
        self.script_name = script_name
        self.log_path = log_path
        self.failure: str | None = None
        self._file = None

    @classmethod
    def for_directory(cls, log_dir: Path | None, script_name: str = SCRIPT_NAME) -> "ScriptLogger":
        """Logger writing under log_dir, or a disabled one when log_dir is None."""
        if log_dir is None:
            return cls(script_name)
        return cls(script_name, get_log_path(log_dir, script_name))

    @property
    def enabled(self) -> bool:
        return self.log_path is not None

    def _ensure_file(self) -> bool:
        """Ensure log file is open. Returns False if it cannot be."""
        if self._file is None:
            try:
                self.log_path.parent.mkdir(parents=True, exist_ok=True)
                self._file = open(self.log_path, "a")
            except OSError as e:
                self.failure = f"Cannot write run log {self.log_path}: {e.strerror or e}"
                self.log_path = None
                return False
        return True

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        if not self.enabled or not self._ensure_file():
            return
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "script": self.script_name,
            "message": message,
            **extra,
        }
        self._file.write(json.dumps(entry, default=str) + "\n")
        self._file.flush()

    def debug(self, message: str, **extra: Any) -> None:
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "ScriptLogger":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
