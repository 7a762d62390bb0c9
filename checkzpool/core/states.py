"""Plugin states and the pool health decision table."""

from enum import Enum


class Severity(Enum):
    """Nagios plugin states. The value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3
    DEPENDENT = 4

    @property
    def exit_code(self) -> int:
        return self.value


UNAVAILABLE_STATE = "UNAVAIL"


def classify_health(keyword: str) -> Severity:
    """Map a pool health keyword from zpool list to a severity."""
    if keyword == "ONLINE":
        return Severity.OK
    if keyword == "DEGRADED":
        return Severity.WARNING
    # FAULTED, OFFLINE, UNAVAIL, REMOVED, SUSPENDED, ...
    return Severity.CRITICAL


def escalate(severity: Severity, verbosity: int, device_state: str) -> tuple[Severity, int]:
    """
    Apply the device-state escalation rule.

    A healthy pool with an unavailable device is raised to WARNING. When that
    happens at verbosity 1 the run continues at verbosity 2, so the device
    shows up in the status line. Severity is never lowered.

    Args:
        severity: Current severity of the run
        verbosity: Current effective verbosity (1-3)
        device_state: State keyword of the device line

    Returns:
        Tuple of (severity, verbosity) after the transition
    """
    if severity is Severity.OK and device_state == UNAVAILABLE_STATE:
        severity = Severity.WARNING
        if verbosity == 1:
            verbosity = 2
    return severity, verbosity
