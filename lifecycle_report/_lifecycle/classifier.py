"""Lifecycle classification of a single device against a release catalog."""

from datetime import date
from typing import TYPE_CHECKING, Optional, Tuple

from .catalog import ReleaseCatalog
from .models import NO_VALUE, CatalogEntry, ClassificationResult, Device, Status, SupportPhase

if TYPE_CHECKING:
    from .platforms import Platform

# Supported cycles ending in fewer than this many days are reported as nearing EOL
NEARING_EOL_DAYS = 180


def days_until(eol_date: Optional[date], today: date) -> Optional[int]:
    """Signed whole days from today to eol_date; negative once it has passed."""
    if eol_date is None:
        return None
    return (eol_date - today).days


def evaluate_entry(entry: CatalogEntry, today: date) -> Tuple[Status, SupportPhase, Optional[int]]:
    """
    Apply the support policy to a matched catalog entry.

    Args:
        entry: Catalog entry for the device's cycle
        today: Reference date for the day count

    Returns:
        Tuple of (status, phase, days_to_eol)
    """
    days = days_until(entry.eol_date, today)

    if not entry.supported:
        return Status.END_OF_LIFE, SupportPhase.EOL, days

    if days is None:
        return Status.SUPPORTED, SupportPhase.SUPPORTED, None
    if days <= 0:
        return Status.END_OF_LIFE, SupportPhase.EOL, days
    if days < NEARING_EOL_DAYS:
        return Status.SUPPORTED, SupportPhase.NEARING_EOL, days
    return Status.SUPPORTED, SupportPhase.SUPPORTED, days


def build_result(
    device: Device,
    os_family: str,
    cycle: Optional[str],
    status: Status,
    phase: SupportPhase,
    catalog: Optional[ReleaseCatalog] = None,
    eol_date: Optional[date] = None,
    days_to_eol: Optional[int] = None,
) -> ClassificationResult:
    """Assemble a ClassificationResult, copying catalog summaries when given."""
    return ClassificationResult(
        os_family=os_family,
        model=device.model,
        device_name=device.name,
        user=device.user,
        os_version=device.os_version,
        cycle=cycle,
        status=status,
        phase=phase,
        eol_date=eol_date,
        days_to_eol=days_to_eol,
        lowest_supported=catalog.lowest_supported if catalog is not None else NO_VALUE,
        newest_available=catalog.newest_available if catalog is not None else NO_VALUE,
    )


def classify_matched(
    device: Device,
    os_family: str,
    cycle: str,
    entry: CatalogEntry,
    catalog: ReleaseCatalog,
    today: date,
) -> ClassificationResult:
    """Classify a device whose cycle was found in the catalog."""
    status, phase, days = evaluate_entry(entry, today)
    return build_result(
        device,
        os_family,
        cycle,
        status,
        phase,
        catalog=catalog,
        eol_date=entry.eol_date,
        days_to_eol=days,
    )


def classify(
    device: Device,
    platform: "Platform",
    catalog: ReleaseCatalog,
    today: Optional[date] = None,
) -> ClassificationResult:
    """
    Classify a device's OS lifecycle.

    Pure function of its inputs: the same device, catalog and date always
    give the same result.

    Args:
        device: Device to classify
        platform: Platform variant the device belongs to
        catalog: Release catalog for that platform
        today: Reference date, defaults to the local current date

    Returns:
        ClassificationResult
    """
    return platform.classify(device, catalog, today or date.today())
