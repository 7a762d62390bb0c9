"""Operating system detection and zpool location."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from checkzpool.core.context import Context


class SupportTier(Enum):
    SUPPORTED = "supported"
    BETA = "beta"
    UNSUPPORTED = "unsupported"


SUPPORTED_SYSTEMS = {
    "SunOS": "/usr/sbin/zpool",
    "Linux": "/sbin/zpool",
    "FreeBSD": "/sbin/zpool",
}

BETA_SYSTEMS = {
    "Darwin": "/usr/local/zfs/bin/zpool",
    "NetBSD": "/sbin/zpool",
}


@dataclass(frozen=True)
class PlatformInfo:
    """Result of platform detection."""

    system: str
    tier: SupportTier
    zpool_path: str | None

    @property
    def notice(self) -> str | None:
        """Message for stderr, if the platform deserves one."""
        if self.tier is SupportTier.BETA:
            return f"NOTE: ZFS support on {self.system} is beta; results may be incomplete."
        if self.tier is SupportTier.UNSUPPORTED:
            return f"This probe does not support {self.system or 'this operating system'}."
        return None


def detect_platform(context: "Context", zpool_override: str | None = None) -> PlatformInfo:
    """
    Classify the running OS and choose the zpool executable.

    Args:
        context: Execution context
        zpool_override: Configured zpool path, replaces the table entry

    Returns:
        PlatformInfo for the current system
    """
    system = context.system()
    if system in SUPPORTED_SYSTEMS:
        tier = SupportTier.SUPPORTED
        path = SUPPORTED_SYSTEMS[system]
    elif system in BETA_SYSTEMS:
        tier = SupportTier.BETA
        path = BETA_SYSTEMS[system]
    else:
        return PlatformInfo(system=system, tier=SupportTier.UNSUPPORTED, zpool_path=None)

    return PlatformInfo(system=system, tier=tier, zpool_path=zpool_override or path)
