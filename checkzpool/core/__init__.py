"""Core probe functionality."""

from checkzpool.core.config import ConfigError, ProbeConfig, load_config
from checkzpool.core.context import Context
from checkzpool.core.logging import ScriptLogger
from checkzpool.core.output import Output
from checkzpool.core.platform import PlatformInfo, SupportTier, detect_platform
from checkzpool.core.states import Severity, classify_health, escalate

__all__ = [
    "ConfigError",
    "Context",
    "Output",
    "PlatformInfo",
    "ProbeConfig",
    "ScriptLogger",
    "Severity",
    "SupportTier",
    "classify_health",
    "detect_platform",
    "escalate",
    "load_config",
]
