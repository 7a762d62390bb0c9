"""Compose the plugin status line."""

from dataclasses import dataclass

from checkzpool.core.states import Severity
from checkzpool.zpool.listing import PoolSummary
from checkzpool.zpool.status import StatusWalk


@dataclass(frozen=True)
class Verdict:
    severity: Severity
    message: str

    @property
    def line(self) -> str:
        return f"{self.severity.name} {self.message}"

    @property
    def exit_code(self) -> int:
        return self.severity.exit_code


def format_message(summary: PoolSummary, annotations: str = "") -> str:
    """'ZPOOL <name> : <health> {Size:.. Used:.. Avail:.. Cap:..[ Dedup:..]} <devices>'"""
    dedup = f" Dedup:{summary.dedup_ratio}" if summary.dedup_ratio else ""
    return (
        f"ZPOOL {summary.name} : {summary.health} "
        f"{{Size:{summary.size} Used:{summary.used} Avail:{summary.available} "
        f"Cap:{summary.capacity}{dedup}}} {annotations}"
    )


def build_verdict(summary: PoolSummary, walk: StatusWalk) -> Verdict:
    return Verdict(walk.severity, format_message(summary, walk.message))


def not_found_verdict(pool: str) -> Verdict:
    return Verdict(Severity.CRITICAL, f"ZPOOL {pool} does not exist and/or is not responding.")


def invocation_failure_verdict(command: str) -> Verdict:
    return Verdict(
        Severity.CRITICAL,
        f"'{command}' command returns no result! "
        "NOTE: this probe needs OS support for ZFS and root privileges.",
    )
