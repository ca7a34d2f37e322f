"""Microsoft Graph calls: client-credentials token and managed device listing."""

from typing import List, Optional

import requests

from lifecycle_report._lifecycle.models import Device
from lifecycle_report.exceptions import APIError, AuthenticationError
from lifecycle_report.http_client import get_default_headers
from lifecycle_report.logging_config import logger

LOGIN_BASE_URL = "https://login.microsoftonline.com"
GRAPH_BASE_URL = "https://graph.microsoft.com"
GRAPH_SCOPE = "https://graph.microsoft.com/.default"
DEVICE_FIELDS = ["id", "deviceName", "model", "operatingSystem", "osVersion", "userDisplayName"]
REQUEST_TIMEOUT = 60


def acquire_token(
    tenant_id: str,
    client_id: str,
    client_secret: str,
    login_base_url: str = LOGIN_BASE_URL,
) -> str:
    """Acquire an app-only Graph access token.

    Args:
        tenant_id: Azure AD tenant ID
        client_id: App registration client ID
        client_secret: App registration client secret
        login_base_url: Base URL of the identity platform

    Returns:
        Bearer access token

    Raises:
        AuthenticationError: If the token cannot be acquired
    """
    url = f"{login_base_url}/{tenant_id}/oauth2/v2.0/token"
    payload = {
        "grant_type": "client_credentials",
        "client_id": client_id,
        "client_secret": client_secret,
        "scope": GRAPH_SCOPE,
    }

    try:
        response = requests.post(url, data=payload, headers=get_default_headers(), timeout=REQUEST_TIMEOUT)
    except requests.exceptions.ConnectionError:
        raise AuthenticationError("Failed to connect to the identity platform")
    except requests.exceptions.Timeout:
        raise AuthenticationError("Token request timed out")

    if not response.ok:
        err_msg = f"Failed to acquire access token. [{response.status_code}]"
        try:
            detail = response.json().get("error_description", "")
            if detail:
                err_msg += f" - {detail}"
        except ValueError:
            pass
        raise AuthenticationError(err_msg)

    try:
        token = response.json().get("access_token")
    except ValueError:
        raise AuthenticationError("Token endpoint returned invalid JSON response")
    if not token:
        raise AuthenticationError("Token endpoint response did not include an access_token")

    logger.debug("Acquired Graph access token")
    return token


def list_managed_devices(token: str, graph_base_url: str = GRAPH_BASE_URL) -> List[Device]:
    """Fetch all Intune managed devices.

    Follows ``@odata.nextLink`` until the last page.

    Args:
        token: Graph access token
        graph_base_url: Base URL of the Graph API

    Returns:
        List of Device objects

    Raises:
        APIError: If any page cannot be fetched
    """
    url: Optional[str] = f"{graph_base_url}/v1.0/deviceManagement/managedDevices"
    params: Optional[dict] = {"$select": ",".join(DEVICE_FIELDS)}
    headers = get_default_headers(token)
    devices: List[Device] = []
    page = 0

    while url:
        page += 1
        try:
            response = requests.get(url, headers=headers, params=params, timeout=REQUEST_TIMEOUT)
        except requests.exceptions.ConnectionError:
            raise APIError("Failed to connect to Microsoft Graph")
        except requests.exceptions.Timeout:
            raise APIError("Graph request timed out")

        if not response.ok:
            raise APIError(f"Failed to list managed devices. [{response.status_code}]")

        try:
            data = response.json()
        except ValueError:
            raise APIError("Graph returned invalid JSON response")
        if not isinstance(data, dict):
            raise APIError(f"Graph returned unexpected response type: {type(data).__name__}")

        items = data.get("value") or []
        if not isinstance(items, list):
            raise APIError(f"Graph returned unexpected device list type: {type(items).__name__}")

        for item in items:
            if isinstance(item, dict):
                devices.append(Device.from_api(item))

        # nextLink already carries the query string
        url = data.get("@odata.nextLink")
        params = None

    logger.info(f"Retrieved {len(devices)} managed devices in {page} page(s)")
    return devices
