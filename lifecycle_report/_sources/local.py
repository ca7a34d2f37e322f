"""Load a device inventory exported to a local JSON file."""

import json
from pathlib import Path
from typing import List

from lifecycle_report._lifecycle.models import Device
from lifecycle_report.exceptions import FileProcessingError
from lifecycle_report.logging_config import logger


def load_devices_file(path: str) -> List[Device]:
    """Read devices from a JSON file.

    Accepts either a bare list of Graph ``managedDevice`` objects or a Graph
    page (``{"value": [...]}``).

    Raises:
        FileProcessingError: If the file is missing, unreadable or malformed
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileProcessingError(f"Devices file not found: {path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise FileProcessingError(f"Failed to read devices file {path}: {e}")

    if isinstance(data, dict):
        data = data.get("value")
    if not isinstance(data, list):
        raise FileProcessingError(f"Devices file {path} must contain a list of devices")

    devices = [Device.from_api(item) for item in data if isinstance(item, dict)]
    logger.info(f"Loaded {len(devices)} devices from {path}")
    return devices
