"""Collaborators that fetch devices and release data."""

from .endoflife import fetch_release_records, parse_release
from .graph import acquire_token, list_managed_devices
from .local import load_devices_file

__all__ = [
    "acquire_token",
    "fetch_release_records",
    "list_managed_devices",
    "load_devices_file",
    "parse_release",
]
