"""Device OS lifecycle classification."""

from .catalog import EMPTY_CATALOG, ReleaseCatalog, build_generic_catalog, build_windows_catalog
from .classifier import NEARING_EOL_DAYS, classify, evaluate_entry
from .models import (
    NO_VALUE,
    CatalogEntry,
    ClassificationResult,
    Device,
    ReleaseRecord,
    Status,
    SupportPhase,
)
from .platforms import OTHER, PLATFORMS, Platform, resolve_platform
from .report import LifecycleReport, build_report, count_by_status, sort_results
from .versioning import extract_major_cycle, extract_windows_build, parse_build_version

__all__ = [
    "EMPTY_CATALOG",
    "NEARING_EOL_DAYS",
    "NO_VALUE",
    "OTHER",
    "PLATFORMS",
    "CatalogEntry",
    "ClassificationResult",
    "Device",
    "LifecycleReport",
    "Platform",
    "ReleaseCatalog",
    "ReleaseRecord",
    "Status",
    "SupportPhase",
    "build_generic_catalog",
    "build_report",
    "build_windows_catalog",
    "classify",
    "count_by_status",
    "evaluate_entry",
    "extract_major_cycle",
    "extract_windows_build",
    "parse_build_version",
    "resolve_platform",
    "sort_results",
]
