"""Per-family release catalogs built from lifecycle release records."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from semantic_version import Version

from lifecycle_report.logging_config import logger

from .models import NO_VALUE, CatalogEntry, ReleaseRecord
from .versioning import parse_build_version

# Marker endoflife.date puts in the label of the consumer (Workstation) edition
WORKSTATION_LABEL_MARKER = "(W)"


@dataclass(frozen=True)
class ReleaseCatalog:
    """
    Indexed, read-only view over one OS family's release records.

    Attributes:
        entries: cycle key -> CatalogEntry
        lowest_supported: Oldest cycle still supported, "-" if none
        newest_available: Newest known cycle, "-" if none
        highest_known_build: Highest Windows build in the catalog (Windows only)
    """

    entries: Mapping[str, CatalogEntry] = field(default_factory=lambda: MappingProxyType({}))
    lowest_supported: str = NO_VALUE
    newest_available: str = NO_VALUE
    highest_known_build: Optional[Version] = None

    def get(self, key: Optional[str]) -> Optional[CatalogEntry]:
        if key is None:
            return None
        return self.entries.get(key)

    def __len__(self) -> int:
        return len(self.entries)


EMPTY_CATALOG = ReleaseCatalog()


def build_generic_catalog(records: Iterable[ReleaseRecord]) -> ReleaseCatalog:
    """
    Build a catalog for a family whose cycles are plain major numbers.

    Cycles that do not parse as integers still get an entry but are left
    out of the lowest/newest aggregates.

    Args:
        records: Release records for one family

    Returns:
        ReleaseCatalog
    """
    entries: Dict[str, CatalogEntry] = {}
    all_cycles: List[int] = []
    supported_cycles: List[int] = []

    for record in records:
        if not record.cycle:
            continue

        try:
            numeric = int(record.cycle)
        except ValueError:
            logger.debug(f"Non-numeric cycle '{record.cycle}' excluded from aggregates")
            numeric = None

        if numeric is not None:
            all_cycles.append(numeric)
            if record.supported:
                supported_cycles.append(numeric)

        entries.setdefault(
            record.cycle,
            CatalogEntry(supported=record.supported, eol_date=record.eol_date, label=record.cycle),
        )

    return ReleaseCatalog(
        entries=MappingProxyType(entries),
        lowest_supported=str(min(supported_cycles)) if supported_cycles else NO_VALUE,
        newest_available=str(max(all_cycles)) if all_cycles else NO_VALUE,
    )


def build_windows_catalog(records: Iterable[ReleaseRecord]) -> ReleaseCatalog:
    """
    Build a catalog for Windows, keyed by build number.

    Several editions can share one build; the Workstation "(W)" record is
    preferred over the others. Summaries use release-date order and the
    human label of the chosen record.

    Args:
        records: Windows release records

    Returns:
        ReleaseCatalog with highest_known_build populated
    """
    chosen: Dict[str, ReleaseRecord] = {}

    for record in records:
        if not record.cycle:
            continue

        existing = chosen.get(record.cycle)
        if existing is None or (
            WORKSTATION_LABEL_MARKER not in (existing.label or "")
            and WORKSTATION_LABEL_MARKER in (record.label or "")
        ):
            chosen[record.cycle] = record

    entries = {
        cycle: CatalogEntry(supported=record.supported, eol_date=record.eol_date, label=record.display_name)
        for cycle, record in chosen.items()
    }

    dated = [record for record in chosen.values() if record.release_date is not None]
    supported = [record for record in dated if record.supported]
    maintained = [record for record in dated if record.is_maintained]

    lowest = min(supported, key=lambda r: r.release_date) if supported else None
    newest = max(maintained, key=lambda r: r.release_date) if maintained else None

    builds = [build for build in (parse_build_version(cycle) for cycle in chosen) if build is not None]

    return ReleaseCatalog(
        entries=MappingProxyType(entries),
        lowest_supported=lowest.display_name if lowest else NO_VALUE,
        newest_available=newest.display_name if newest else NO_VALUE,
        highest_known_build=max(builds) if builds else None,
    )
