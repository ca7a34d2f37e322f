"""Data models for lifecycle classification."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional

# Placeholder shown for catalog summaries that have no value
NO_VALUE = "-"


class Status(Enum):
    """Overall support status of a device."""

    SUPPORTED = "Supported"
    END_OF_LIFE = "EndOfLife"
    UNKNOWN = "Unknown"

    @property
    def rank(self) -> int:
        """Sort rank: end-of-life devices first, then unknown, then the rest."""
        if self is Status.END_OF_LIFE:
            return 0
        if self is Status.UNKNOWN:
            return 1
        return 2


class SupportPhase(Enum):
    """Finer-grained lifecycle phase of a device's OS cycle."""

    SUPPORTED = "Supported"
    NEARING_EOL = "NearingEOL"
    EOL = "EOL"
    UNKNOWN = "Unknown"
    PREVIEW = "Preview/Beta"
    UNMAPPED = "Unmapped"


def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date string, returning None for anything unparseable.

    endoflife.date uses booleans in some date fields, so non-strings are
    treated as absent too.
    """
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class Device:
    """A managed device as reported by the device-management API."""

    id: str
    name: str
    model: str
    os_family: str
    os_version: str
    user: str

    @classmethod
    def from_api(cls, data: dict) -> "Device":
        """Build a Device from a Graph ``managedDevice`` object."""
        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("deviceName")),
            model=_text(data.get("model")),
            os_family=_text(data.get("operatingSystem")),
            os_version=_text(data.get("osVersion")),
            user=_text(data.get("userDisplayName")),
        )

    @property
    def has_version(self) -> bool:
        return bool(self.os_version)


@dataclass(frozen=True)
class ReleaseRecord:
    """One lifecycle release entry for an OS family.

    Attributes:
        cycle: Cycle identifier ("17", "14") or, for Windows, the build ("10.0.26100")
        eol_date: End-of-life date if published and parseable
        is_eol: Whether the release is flagged end-of-life
        is_maintained: Whether the release still receives maintenance
        label: Human-readable release label (Windows, e.g. "11 24H2 (W)")
        release_date: First release date (Windows)
    """

    cycle: str
    eol_date: Optional[date] = None
    is_eol: bool = False
    is_maintained: bool = False
    label: Optional[str] = None
    release_date: Optional[date] = None

    @property
    def supported(self) -> bool:
        return not self.is_eol and self.is_maintained

    @property
    def display_name(self) -> str:
        return self.label or self.cycle


@dataclass(frozen=True)
class CatalogEntry:
    """Per-cycle lookup data held by a ReleaseCatalog."""

    supported: bool
    eol_date: Optional[date] = None
    label: Optional[str] = None


@dataclass(frozen=True)
class ClassificationResult:
    """Lifecycle classification of a single device."""

    os_family: str
    model: str
    device_name: str
    user: str
    os_version: str
    cycle: Optional[str]
    status: Status
    phase: SupportPhase
    eol_date: Optional[date] = None
    days_to_eol: Optional[int] = None
    lowest_supported: str = NO_VALUE
    newest_available: str = NO_VALUE

    @property
    def sort_key(self) -> tuple:
        return (self.status.rank, self.os_family, self.cycle or "", self.device_name)

    def to_dict(self) -> dict:
        """Flatten the result for export."""
        return {
            "os_family": self.os_family,
            "cycle": self.cycle,
            "device_name": self.device_name,
            "model": self.model,
            "user": self.user,
            "os_version": self.os_version,
            "status": self.status.value,
            "phase": self.phase.value,
            "eol_date": self.eol_date.isoformat() if self.eol_date else None,
            "days_to_eol": self.days_to_eol,
            "lowest_supported": self.lowest_supported,
            "newest_available": self.newest_available,
        }
