"""endoflife.date API: release records per OS product."""

from typing import List, Optional

import requests

from lifecycle_report._lifecycle.models import ReleaseRecord, parse_date
from lifecycle_report._lifecycle.versioning import extract_windows_build
from lifecycle_report.exceptions import APIError
from lifecycle_report.http_client import get_default_headers
from lifecycle_report.logging_config import logger

ENDOFLIFE_BASE_URL = "https://endoflife.date"
REQUEST_TIMEOUT = 30


def parse_release(data: dict, windows: bool = False) -> Optional[ReleaseRecord]:
    """
    Convert one endoflife.date v1 release object into a ReleaseRecord.

    For Windows the cycle is the build prefix of ``latest.name``
    (e.g. "10.0.26100"), since devices report build numbers rather than
    marketing names.

    Args:
        data: Release object from ``result.releases``
        windows: Whether the record belongs to the Windows product

    Returns:
        ReleaseRecord, or None if the object carries no cycle at all
    """
    if windows:
        latest = data.get("latest") or {}
        raw_build = str(latest.get("name") or "") if isinstance(latest, dict) else ""
        cycle = extract_windows_build(raw_build) or raw_build
    else:
        cycle = str(data.get("name") or "")

    if not cycle:
        logger.debug(f"Skipping release without a cycle: {data.get('name')}")
        return None

    return ReleaseRecord(
        cycle=cycle,
        eol_date=parse_date(data.get("eolFrom")),
        is_eol=bool(data.get("isEol")),
        is_maintained=bool(data.get("isMaintained")),
        label=data.get("label") if windows else None,
        release_date=parse_date(data.get("releaseDate")),
    )


def fetch_release_records(product: str, base_url: str = ENDOFLIFE_BASE_URL) -> List[ReleaseRecord]:
    """
    Fetch the release records of one product.

    Args:
        product: endoflife.date product identifier (e.g. "ios", "windows")
        base_url: Base URL of the endoflife.date site

    Returns:
        List of ReleaseRecord

    Raises:
        APIError: If the API call fails or returns an unexpected shape
    """
    url = f"{base_url}/api/v1/products/{product}"

    try:
        response = requests.get(url, headers=get_default_headers(), timeout=REQUEST_TIMEOUT)
    except requests.exceptions.ConnectionError:
        raise APIError("Failed to connect to endoflife.date")
    except requests.exceptions.Timeout:
        raise APIError("endoflife.date request timed out")

    if not response.ok:
        raise APIError(f"Failed to fetch release data for '{product}'. [{response.status_code}]")

    try:
        data = response.json()
    except ValueError:
        raise APIError(f"endoflife.date returned invalid JSON response for '{product}'")

    result = data.get("result") if isinstance(data, dict) else None
    releases = result.get("releases") if isinstance(result, dict) else None
    if not isinstance(releases, list):
        raise APIError(f"endoflife.date returned unexpected response for '{product}'")

    windows = product == "windows"
    records: List[ReleaseRecord] = []
    for item in releases:
        if not isinstance(item, dict):
            continue
        record = parse_release(item, windows)
        if record is not None:
            records.append(record)

    logger.info(f"Loaded {len(records)} release records for {product}")
    return records
