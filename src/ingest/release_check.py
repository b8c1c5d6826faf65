"""Remote release metadata check.

This module fetches the latest published export build and compares it
with the installed version token.
"""

from __future__ import annotations

import json

import requests

from core.errors import ReleaseCheckError
from core.logging_config import get_logger
from core.types import ReleaseCheck, ReleaseInfo, VersionStatus
from ingest.version_reader import parse_build_number

_LOGGER = get_logger(__name__)

STATUS_MESSAGES: dict[VersionStatus, str] = {
    "not_installed": "No static data installed",
    "up_to_date": "Running the latest static data version",
    "update_available": "A newer version is available",
    "newer_than_latest": "Installed version is newer than latest official release",
}


def fetch_latest_release(url: str, timeout: float) -> ReleaseInfo:
    """Fetch the latest published release.

    Args:
        url: Metadata endpoint returning JSONL; the first line describes
            the latest build.
        timeout: HTTP timeout in seconds.

    Returns:
        Latest release build number and date.

    Raises:
        ReleaseCheckError: If the request fails or the payload is invalid.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as error:
        raise ReleaseCheckError(
            f"Failed to fetch latest release metadata from {url}: {error}. "
            "Check network access or set SDE_LATEST_VERSION_URL."
        ) from error
    lines = response.text.strip().splitlines()
    first_line = lines[0] if lines else ""
    try:
        payload = json.loads(first_line)
    except json.JSONDecodeError as error:
        raise ReleaseCheckError(
            f"Failed to parse latest release metadata from {url}: {error.msg}."
        ) from error
    if not isinstance(payload, dict):
        raise ReleaseCheckError(
            f"Invalid latest release metadata from {url}: expected JSON object."
        )
    build_number = payload.get("buildNumber")
    release_date = payload.get("releaseDate")
    if isinstance(build_number, bool) or not isinstance(build_number, int) or not release_date:
        raise ReleaseCheckError(
            f"Invalid latest release metadata from {url}: "
            "expected fields 'buildNumber' and 'releaseDate'."
        )
    _LOGGER.info("latest_release_fetched", build_number=build_number, url=url)
    return ReleaseInfo(build_number=build_number, release_date=str(release_date))


def compare_versions(installed_version: str | None, latest: ReleaseInfo) -> ReleaseCheck:
    """Compare the installed version token with the latest release.

    Args:
        installed_version: Installed token like ``sde-3142455``, or None.
        latest: Latest published release.

    Returns:
        Comparison result. A missing or unparseable token counts as not
        installed.
    """
    installed_build = parse_build_number(installed_version)
    status: VersionStatus
    if installed_build is None:
        status = "not_installed"
    elif installed_build == latest.build_number:
        status = "up_to_date"
    elif installed_build < latest.build_number:
        status = "update_available"
    else:
        status = "newer_than_latest"
    return ReleaseCheck(
        status=status,
        update_available=status in ("not_installed", "update_available"),
        latest=latest,
        installed_version=installed_version,
        installed_build=installed_build,
    )
