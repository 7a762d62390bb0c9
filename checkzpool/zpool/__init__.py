"""Parsing of zpool list / zpool status output."""

from checkzpool.zpool.listing import ListFormat, PoolSummary, parse_pool_list, read_pool_summary
from checkzpool.zpool.locations import Location, LocationDirectory
from checkzpool.zpool.report import Verdict, build_verdict, format_message
from checkzpool.zpool.status import DeviceRecord, Decoration, StatusWalk, read_device_status, walk_status

__all__ = [
    "Decoration",
    "DeviceRecord",
    "ListFormat",
    "Location",
    "LocationDirectory",
    "PoolSummary",
    "StatusWalk",
    "Verdict",
    "build_verdict",
    "format_message",
    "parse_pool_list",
    "read_device_status",
    "read_pool_summary",
    "walk_status",
]
