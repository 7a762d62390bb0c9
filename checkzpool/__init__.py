"""Nagios-style health probe for ZFS storage pools."""

__version__ = "1.0.0"
