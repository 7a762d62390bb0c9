"""
Walk the device tree of `zpool status <pool>`.

The config section of zpool status looks like::

    	NAME             STATE     READ WRITE CKSUM
    	tank             DEGRADED     0     0     0
    	  raidz1-0       DEGRADED     0     0     0
    	    sda          ONLINE       0     0     0
    	    replacing-1  DEGRADED     0     0     0
    	      sdb        UNAVAIL      0     0     0
    	      sdd        ONLINE       0     0     0
    	spares
    	  sde            AVAIL

The column header arms the scanner, the pool's own line starts collection and
the first blank line ends it. Indentation depth decides how a device is
decorated in the status line.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from checkzpool.core.states import Severity, escalate
from checkzpool.lib.process import run_command
from checkzpool.zpool.locations import Location, LocationDirectory

if TYPE_CHECKING:
    from checkzpool.core.context import Context
    from checkzpool.core.logging import ScriptLogger


MAX_VERBOSITY = 3

HEALTHY_DEVICE_STATES = frozenset({"ONLINE", "AVAIL", "INUSE"})

STATUS_HEADER = re.compile(r"NAME\s+STATE\s+READ\s+WRITE\s+CKSUM")
SPARES_GROUP = re.compile(r"^\s+spares\s*$")
SPARE_MEMBER = re.compile(r"^\s+spare(?:-\d+)?\s+(\S+)")
REPLACING = re.compile(r"^\s+replacing(?:-\d+)?\s+(\S+)")
PROGRESS = re.compile(r"(\d+(?:\.\d+)?%)")
DEVICE_LINE = re.compile(r"^(\s+)(\S+)\s+(\S+)")


class ScanState(Enum):
    SEARCHING = "searching"
    ARMED = "armed"
    COLLECTING = "collecting"


class Decoration(Enum):
    """How a device is printed, chosen by its indentation depth."""

    PLAIN = "plain"
    ANGLE = "angle"
    PAREN = "paren"

    @classmethod
    def for_indent(cls, indent: str) -> "Decoration":
        if len(indent) == 3:
            return cls.ANGLE
        if len(indent) == 7:
            return cls.PAREN
        return cls.PLAIN

    def render(self, identifier: str, state: str) -> str:
        if self is Decoration.ANGLE:
            return f"<{identifier}:{state}> "
        if self is Decoration.PAREN:
            return f"({identifier}:{state}) "
        return f"{identifier}:{state} "


@dataclass(frozen=True)
class DeviceRecord:
    """One ordinary entry of the device tree."""

    path: str
    state: str
    decoration: Decoration
    location: Location | None = None

    @property
    def label(self) -> str:
        if self.location is None:
            return self.path
        return self.path + self.location.suffix

    @property
    def healthy(self) -> bool:
        return self.state in HEALTHY_DEVICE_STATES

    def render(self) -> str:
        return self.decoration.render(self.label, self.state)


@dataclass
class StatusWalk:
    """Outcome of walking the device tree."""

    severity: Severity
    verbosity: int
    annotations: list[str] = field(default_factory=list)
    devices: list[DeviceRecord] = field(default_factory=list)

    @property
    def message(self) -> str:
        return "".join(self.annotations)


def is_visible(verbosity: int, severity: Severity, state: str) -> bool:
    """Whether a device line belongs in the status line."""
    if verbosity >= MAX_VERBOSITY:
        return True
    if verbosity == 2:
        return severity is not Severity.OK and state not in HEALTHY_DEVICE_STATES
    return False


def group_annotation(line: str) -> str | None:
    """
    Annotation for spares/spare/replacing lines.

    Returns None if the line is an ordinary device line.
    """
    if SPARES_GROUP.match(line):
        return "[spares] "

    match = SPARE_MEMBER.match(line)
    if match:
        return f"[spare:{match.group(1)}] "

    match = REPLACING.match(line)
    if match:
        progress = PROGRESS.search(line)
        return f"[replacing:{match.group(1)}:{progress.group(1) if progress else 'working'}] "

    return None


def _starts_pool_tree(line: str, pool: str) -> bool:
    tokens = line.split()
    return line[:1].isspace() and bool(tokens) and tokens[0] == pool


def walk_status(
    text: str,
    pool: str,
    severity: Severity,
    verbosity: int,
    directory: LocationDirectory | None = None,
    hostname: str = "",
    logger: "ScriptLogger | None" = None,
) -> StatusWalk:
    """
    Collect device annotations from `zpool status` output.

    Args:
        text: Command output
        pool: Pool whose tree is collected; other pools' trees are skipped
        severity: Severity derived from the pool health so far
        verbosity: Verbosity level 1-3, already validated
        directory: Bay directory for '/tray N' suffixes
        hostname: Host name used for bay lookups
        logger: Optional run logger

    Returns:
        StatusWalk with the possibly escalated severity and verbosity
    """
    walk = StatusWalk(severity=severity, verbosity=verbosity)
    state = ScanState.SEARCHING

    for line in text.splitlines():
        if state is ScanState.COLLECTING:
            if not line.strip():
                state = ScanState.SEARCHING
                continue
            _collect_line(walk, line, pool, directory, hostname, logger)
            continue

        if STATUS_HEADER.search(line):
            state = ScanState.ARMED
            continue

        if state is ScanState.ARMED:
            if _starts_pool_tree(line, pool):
                state = ScanState.COLLECTING
                _collect_line(walk, line, pool, directory, hostname, logger)
            else:
                state = ScanState.SEARCHING

    return walk


def _collect_line(
    walk: StatusWalk,
    line: str,
    pool: str,
    directory: LocationDirectory | None,
    hostname: str,
    logger: "ScriptLogger | None",
) -> None:
    if not line[:1].isspace():
        return

    annotation = group_annotation(line)
    if annotation is not None:
        if walk.verbosity >= MAX_VERBOSITY:
            walk.annotations.append(annotation)
        return

    match = DEVICE_LINE.match(line)
    if not match:
        return
    indent, path, dev_state = match.groups()

    location = directory.lookup(hostname, pool, path) if directory else None
    device = DeviceRecord(
        path=path,
        state=dev_state,
        decoration=Decoration.for_indent(indent),
        location=location,
    )
    walk.devices.append(device)

    previous = walk.severity
    walk.severity, walk.verbosity = escalate(walk.severity, walk.verbosity, dev_state)
    if logger and walk.severity is not previous:
        logger.warning(
            "Severity escalated by device state",
            device=path,
            state=dev_state,
            severity=walk.severity.name,
            verbosity=walk.verbosity,
        )

    if is_visible(walk.verbosity, walk.severity, dev_state):
        walk.annotations.append(device.render())


def read_device_status(
    pool: str,
    zpool: str,
    context: "Context",
    severity: Severity,
    verbosity: int,
    directory: LocationDirectory | None = None,
    timeout: int | None = 60,
    logger: "ScriptLogger | None" = None,
) -> StatusWalk:
    """
    Run `zpool status` for one pool and walk its device tree.

    Raises:
        CommandError: If zpool cannot be run at all
    """
    cmd = [zpool, "status", pool]
    if logger:
        logger.debug("Running command", command=cmd)
    output = run_command(cmd, context=context, timeout=timeout)
    return walk_status(
        output,
        pool,
        severity,
        verbosity,
        directory=directory,
        hostname=context.hostname(),
        logger=logger,
    )
