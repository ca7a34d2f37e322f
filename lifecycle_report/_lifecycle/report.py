"""Report assembly: classify a device collection, filter and order it."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from lifecycle_report.logging_config import logger

from .catalog import EMPTY_CATALOG, ReleaseCatalog
from .classifier import classify
from .models import ClassificationResult, Device, Status
from .platforms import resolve_platform


@dataclass
class LifecycleReport:
    """Ordered classification rows plus counts for the summary."""

    results: List[ClassificationResult] = field(default_factory=list)
    skipped_devices: int = 0

    @property
    def status_counts(self) -> Dict[Status, int]:
        return count_by_status(self.results)

    def __len__(self) -> int:
        return len(self.results)


def sort_results(results: Iterable[ClassificationResult]) -> List[ClassificationResult]:
    """Order rows: end-of-life first, then unknown, then the rest; ties by family, cycle, device."""
    return sorted(results, key=lambda result: result.sort_key)


def count_by_status(results: Iterable[ClassificationResult]) -> Dict[Status, int]:
    """Count rows per status. Every status is present, zero when unused."""
    counts = Counter(result.status for result in results)
    return {status: counts.get(status, 0) for status in Status}


def build_report(
    devices: Iterable[Device],
    catalogs: Mapping[str, ReleaseCatalog],
    only_eol: bool = False,
    today: Optional[date] = None,
) -> LifecycleReport:
    """
    Classify every device and produce the ordered report.

    Devices without an OS version are dropped rather than classified.

    Args:
        devices: Devices to report on
        catalogs: Release catalog per platform name (e.g. "iOS", "Windows")
        only_eol: Keep only end-of-life rows
        today: Reference date, defaults to the local current date

    Returns:
        LifecycleReport
    """
    today = today or date.today()
    report = LifecycleReport()
    results: List[ClassificationResult] = []

    for device in devices:
        if not device.has_version:
            logger.debug(f"Skipping device '{device.name}' with no OS version")
            report.skipped_devices += 1
            continue

        platform = resolve_platform(device.os_family)
        catalog = catalogs.get(platform.name, EMPTY_CATALOG)
        results.append(classify(device, platform, catalog, today))

    if only_eol:
        results = [result for result in results if result.status is Status.END_OF_LIFE]

    report.results = sort_results(results)
    logger.info(f"Classified {len(report.results)} devices ({report.skipped_devices} skipped without version)")
    return report
