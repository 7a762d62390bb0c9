"""
Read the one-line pool summary from `zpool list <pool>`.

Different ZFS releases print different column sets. Each known header is a
ListFormat member whose value is the column tuple; the header line picks the
layout and the data row is then split positionally.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from checkzpool.lib.process import run_command

if TYPE_CHECKING:
    from checkzpool.core.context import Context
    from checkzpool.core.logging import ScriptLogger


class ListFormat(Enum):
    """Known `zpool list` header layouts."""

    # Solaris 10 and early ZFS releases
    LEGACY = ("NAME", "SIZE", "USED", "AVAIL", "CAP", "HEALTH", "ALTROOT")
    # Releases with deduplication
    DEDUP = ("NAME", "SIZE", "ALLOC", "FREE", "CAP", "DEDUP", "HEALTH", "ALTROOT")
    # FreeBSD with fragmentation reporting
    FREEBSD = ("NAME", "SIZE", "ALLOC", "FREE", "FRAG", "EXPANDSZ", "CAP", "DEDUP", "HEALTH", "ALTROOT")
    FREEBSD_EXPANDSZ = ("NAME", "SIZE", "ALLOC", "FREE", "EXPANDSZ", "FRAG", "CAP", "DEDUP", "HEALTH", "ALTROOT")
    # OpenZFS 0.8 and later
    CHECKPOINT = (
        "NAME", "SIZE", "ALLOC", "FREE", "CKPOINT", "EXPANDSZ", "FRAG", "CAP", "DEDUP", "HEALTH", "ALTROOT",
    )

    @property
    def columns(self) -> tuple[str, ...]:
        return self.value

    @property
    def pattern(self) -> re.Pattern:
        return re.compile(r"^\s*" + r"\s+".join(self.value) + r"\s*$")


DEFAULT_FORMAT = ListFormat.LEGACY

# Column header -> PoolSummary attribute
COLUMN_FIELDS = {
    "NAME": "name",
    "SIZE": "size",
    "USED": "used",
    "ALLOC": "used",
    "AVAIL": "available",
    "FREE": "available",
    "CAP": "capacity",
    "DEDUP": "dedup_ratio",
    "FRAG": "fragmentation",
    "EXPANDSZ": "expand_size",
    "CKPOINT": "checkpoint",
    "HEALTH": "health",
}


@dataclass(frozen=True)
class PoolSummary:
    """Space and health figures for one pool, as printed by zpool."""

    name: str
    size: str
    used: str
    available: str
    capacity: str
    health: str
    dedup_ratio: str | None = None
    fragmentation: str | None = None
    expand_size: str | None = None
    checkpoint: str | None = None


def detect_format(line: str) -> ListFormat | None:
    """Return the layout whose header matches line, if any."""
    for fmt in ListFormat:
        if fmt.pattern.match(line):
            return fmt
    return None


def parse_pool_row(fields: list[str], fmt: ListFormat) -> PoolSummary | None:
    """Map a whitespace-split data row onto the columns of fmt."""
    values = {}
    for column, value in zip(fmt.columns, fields):
        attr = COLUMN_FIELDS.get(column)
        if attr:
            values[attr] = value

    required = ("name", "size", "used", "available", "capacity", "health")
    if any(key not in values for key in required):
        return None
    return PoolSummary(**values)


def scan_pool_list(text: str, pool: str) -> tuple[ListFormat, PoolSummary | None]:
    """
    Parse `zpool list <pool>` output.

    The last header seen before the pool's row selects the layout; without
    a recognised header the legacy layout applies.

    Args:
        text: Command output
        pool: Pool name to look for

    Returns:
        Tuple of (layout used, PoolSummary or None if no row for the pool
        carried a health column)
    """
    fmt = DEFAULT_FORMAT
    for line in text.splitlines():
        detected = detect_format(line)
        if detected is not None:
            fmt = detected
            continue

        fields = line.split()
        if fields and fields[0] == pool:
            return fmt, parse_pool_row(fields, fmt)

    return fmt, None


def parse_pool_list(text: str, pool: str) -> PoolSummary | None:
    """Parse `zpool list <pool>` output into a PoolSummary."""
    return scan_pool_list(text, pool)[1]


def read_pool_summary(
    pool: str,
    zpool: str,
    context: "Context",
    timeout: int | None = 60,
    logger: "ScriptLogger | None" = None,
) -> PoolSummary | None:
    """
    Run `zpool list` for one pool and parse it.

    Raises:
        CommandError: If zpool cannot be run at all
    """
    cmd = [zpool, "list", pool]
    if logger:
        logger.debug("Running command", command=cmd)
    output = run_command(cmd, context=context, timeout=timeout)
    fmt, summary = scan_pool_list(output, pool)
    if logger:
        logger.debug("Parsed pool list", pool=pool, layout=fmt.name, found=summary is not None)
    return summary
