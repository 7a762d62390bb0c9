"""Physical bay labels for pool member devices."""

from dataclasses import dataclass
from typing import Any, Mapping

LEVELS = ("host", "pool", "chassis")


@dataclass(frozen=True)
class Location:
    """A slot in a named disk chassis."""

    chassis: str
    slot: int | str

    @property
    def suffix(self) -> str:
        return f"/tray {self.slot}"


def validate_table(table: Any) -> None:
    """
    Check the shape of a location table.

    Empty levels (None) are allowed; slots must be integers or strings.

    Raises:
        ValueError: Naming the first entry with the wrong shape
    """
    if table is None:
        return
    if not isinstance(table, Mapping):
        raise ValueError(f"locations must be a mapping of hosts, got {type(table).__name__}")

    def _check(mapping: Mapping, depth: int, trail: list[str]) -> None:
        for key, value in mapping.items():
            where = "/".join(trail + [str(key)])
            if depth < len(LEVELS):
                if value is None:
                    continue
                if not isinstance(value, Mapping):
                    raise ValueError(
                        f"locations {where}: {LEVELS[depth]} entry must be a mapping, "
                        f"got {type(value).__name__}"
                    )
                _check(value, depth + 1, trail + [str(key)])
            elif isinstance(value, bool) or not isinstance(value, (int, str)):
                raise ValueError(f"locations {where}: slot must be a number or name, got {value!r}")

    _check(table, 0, [])


class LocationDirectory:
    """
    Read-only lookup of device bays.

    Built from a nested mapping::

        {hostname: {pool: {chassis: {device: slot}}}}

    which is the shape of the ``locations`` key in the config file.

    Raises:
        ValueError: If the table does not have that shape
    """

    def __init__(self, table: Mapping[str, Any] | None = None):
        validate_table(table)
        self._table: dict[tuple[str, str, str], Location] = {}
        for hostname, pools in (table or {}).items():
            for pool, chassis_map in (pools or {}).items():
                for chassis, devices in (chassis_map or {}).items():
                    for device, slot in (devices or {}).items():
                        key = (str(hostname), str(pool), str(device))
                        # First chassis listing a device wins
                        self._table.setdefault(key, Location(str(chassis), slot))

    def __len__(self) -> int:
        return len(self._table)

    def lookup(self, hostname: str, pool: str, device: str) -> Location | None:
        """Find the bay of a device across every chassis of the host's pool."""
        return self._table.get((hostname, pool, device))
