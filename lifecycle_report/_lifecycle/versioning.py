"""Cycle key extraction from raw OS version strings."""

import re
from typing import Optional

from semantic_version import Version

# major.minor.build at the start of a Windows version ("10.0.26100.1000")
WINDOWS_BUILD_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)")


def extract_major_cycle(version: Optional[str]) -> Optional[str]:
    """
    Extract the major cycle from a generic OS version string.

    Args:
        version: Raw version (e.g., "17.4.1 (build 21E236)", "14")

    Returns:
        Major cycle (e.g., "17") or None
    """
    if not version:
        return None

    tokens = version.split()
    if not tokens:
        return None

    major = tokens[0].split(".")[0]
    return major or None


def extract_windows_build(version: Optional[str]) -> Optional[str]:
    """
    Extract the major.minor.build prefix from a Windows version string.

    Groups are normalised through int(), so "10.0.026100" and "10.0.26100"
    give the same key.

    Args:
        version: Raw version (e.g., "10.0.26100.1000")

    Returns:
        Build key (e.g., "10.0.26100") or None when the prefix is missing
    """
    if not version:
        return None

    match = WINDOWS_BUILD_PATTERN.match(version.strip())
    if not match:
        return None
    return ".".join(str(int(group)) for group in match.groups())


def parse_build_version(build: Optional[str]) -> Optional[Version]:
    """Parse a Windows build key into a comparable version, or None."""
    key = extract_windows_build(build)
    if key is None:
        return None

    major, minor, patch = (int(part) for part in key.split("."))
    return Version(major=major, minor=minor, patch=patch)
