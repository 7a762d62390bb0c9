"""Configuration loading with layered overrides."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from checkzpool.zpool.locations import validate_table

DEFAULT_TIMEOUT = 60

SYSTEM_CONFIG = Path("/etc/check_zpool.yaml")


class ConfigError(Exception):
    """An explicitly requested config file is missing or malformed."""

    pass


@dataclass
class ProbeConfig:
    """Resolved probe settings."""

    zpool: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    log_dir: Path | None = None
    locations: dict[str, Any] = field(default_factory=dict)


def default_search_paths() -> list[Path]:
    """User config, then system config."""
    return [Path.home() / ".config" / "check_zpool" / "config.yaml", SYSTEM_CONFIG]


def load_config_file(path: Path) -> dict[str, Any]:
    """Load a YAML config file if it exists."""
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _read_explicit(path: Path) -> dict[str, Any]:
    """Load a config file named on the command line; errors are fatal."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e.strerror}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def get_config_value(key: str, layers: list[dict[str, Any]]) -> Any:
    """Get config value from the first layer that defines it."""
    for data in layers:
        if key in data:
            return data[key]
    return None


def load_config(
    path: Path | None = None,
    search_paths: list[Path] | None = None,
) -> ProbeConfig:
    """
    Resolve probe settings.

    Precedence: explicit file -> user config -> system config -> defaults.

    Args:
        path: Config file given with --config
        search_paths: Implicit config files (default: user, then system)

    Returns:
        ProbeConfig with resolved values

    Raises:
        ConfigError: If the explicit file cannot be read or parsed, or a
            value has the wrong type
    """
    layers = []
    if path is not None:
        layers.append(_read_explicit(path))
    if search_paths is None:
        search_paths = default_search_paths()
    layers.extend(load_config_file(p) for p in search_paths)

    timeout = get_config_value("timeout", layers)
    log_dir = get_config_value("log_dir", layers)
    locations = get_config_value("locations", layers)

    try:
        timeout = int(timeout) if timeout is not None else DEFAULT_TIMEOUT
    except (TypeError, ValueError) as e:
        raise ConfigError(f"timeout must be an integer, got {timeout!r}") from e

    try:
        validate_table(locations)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    return ProbeConfig(
        zpool=get_config_value("zpool", layers),
        timeout=timeout,
        log_dir=Path(log_dir).expanduser() if log_dir else None,
        locations=locations or {},
    )
