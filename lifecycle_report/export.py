"""Write classified rows to JSON or CSV files."""

import csv
import json
from datetime import date
from pathlib import Path
from typing import Dict, List

from ._lifecycle.models import ClassificationResult, Status
from .exceptions import FileProcessingError
from .logging_config import logger

CSV_FIELDS = [
    "os_family",
    "cycle",
    "device_name",
    "model",
    "user",
    "os_version",
    "status",
    "phase",
    "eol_date",
    "days_to_eol",
    "lowest_supported",
    "newest_available",
]

SUPPORTED_SUFFIXES = (".json", ".csv")


def serialize_report(results: List[ClassificationResult], counts: Dict[Status, int], as_of: date) -> dict:
    """Build the JSON document for a report."""
    return {
        "as_of": as_of.isoformat(),
        "summary": {status.value: counts.get(status, 0) for status in Status},
        "devices": [result.to_dict() for result in results],
    }


def write_report(
    path: str,
    results: List[ClassificationResult],
    counts: Dict[Status, int],
    as_of: date,
) -> None:
    """
    Write the report to a file; the format follows the file extension.

    Args:
        path: Output path ending in .json or .csv
        results: Ordered report rows
        counts: Status counts for the JSON summary
        as_of: Reference date the report was computed for

    Raises:
        FileProcessingError: If the extension is unsupported or writing fails
    """
    output = Path(path)
    suffix = output.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise FileProcessingError(f"Unsupported output format '{suffix}', use .json or .csv")

    try:
        with open(output, "w", encoding="utf-8", newline="") as f:
            if suffix == ".json":
                json.dump(serialize_report(results, counts, as_of), f, indent=2)
                f.write("\n")
            else:
                writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
                writer.writeheader()
                for result in results:
                    writer.writerow(result.to_dict())
    except OSError as e:
        raise FileProcessingError(f"Failed to write report to {path}: {e}")

    logger.info(f"Wrote {len(results)} rows to {path}")
