"""Shared helpers for the probe."""

from checkzpool.lib.process import CommandError, run_command

__all__ = [
    "CommandError",
    "run_command",
]
