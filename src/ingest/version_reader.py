"""Export version metadata reader.

This module locates an export archive and reads its version member.
Version tokens are the canonical installed-version identifiers used
for up-to-date checks.
"""

from __future__ import annotations

import json
from pathlib import Path
import re
from typing import Any

from core.constants import ARCHIVE_SUFFIX, VERSION_MEMBER_NAME, VERSION_PREFIX
from core.errors import MemberNotFoundError, NoArchiveFoundError, VersionUnreadableError
from core.types import SdeVersion
from ingest.archive_access import SdeArchive

_VERSION_PATTERN = re.compile(rf"{re.escape(VERSION_PREFIX)}(\d+)")


def resolve_archive_path(data_path: Path) -> Path:
    """Resolve an archive path from a file or directory.

    Args:
        data_path: Direct archive path or directory containing archives.

    Returns:
        Archive path. For directories, the first archive in name order.

    Raises:
        NoArchiveFoundError: If no archive exists at the path.
    """
    if data_path.is_dir():
        archives = sorted(
            path for path in data_path.glob(f"*{ARCHIVE_SUFFIX}") if path.is_file()
        )
        if not archives:
            raise NoArchiveFoundError(
                f"No {ARCHIVE_SUFFIX} archive found in directory {data_path}. "
                "Download an export archive into this directory and retry."
            )
        return archives[0]
    if data_path.suffix.lower() == ARCHIVE_SUFFIX and data_path.is_file():
        return data_path
    raise NoArchiveFoundError(
        f"Invalid data path {data_path}: expected an existing {ARCHIVE_SUFFIX} archive "
        "or a directory containing one."
    )


def read_sde_version(data_path: Path) -> SdeVersion:
    """Read version metadata of an export.

    Args:
        data_path: Archive path or directory containing an archive.

    Returns:
        Parsed version metadata.

    Raises:
        NoArchiveFoundError: If no archive can be located.
        ArchiveUnreadableError: If the archive cannot be opened.
        VersionUnreadableError: If the version member is missing or invalid.
    """
    archive_path = resolve_archive_path(data_path)
    with SdeArchive.open(archive_path) as archive:
        try:
            contents = archive.read_member(VERSION_MEMBER_NAME)
        except MemberNotFoundError as error:
            raise VersionUnreadableError(
                f"{VERSION_MEMBER_NAME} not found in archive {archive_path}. "
                "The file is not a static data export."
            ) from error
    payload = _parse_version_payload(contents, archive_path)
    return version_from_payload(payload, str(archive_path))


def version_from_payload(payload: dict[str, Any], source: str) -> SdeVersion:
    """Build version metadata from a decoded metadata line.

    Args:
        payload: Decoded JSON object with ``buildNumber`` and ``releaseDate``.
        source: Origin used in error messages.

    Returns:
        Version metadata with ``sde-<build>`` token and date-only release.

    Raises:
        VersionUnreadableError: If the build number is missing or not an integer.
    """
    build_number = payload.get("buildNumber")
    if isinstance(build_number, bool) or not isinstance(build_number, int):
        raise VersionUnreadableError(
            f"Invalid version metadata in {source}: expected integer field 'buildNumber'."
        )
    release_date = str(payload.get("releaseDate") or "")
    return SdeVersion(
        version=format_version(build_number),
        build_number=build_number,
        release_date=release_date.split("T", 1)[0],
    )


def format_version(build_number: int) -> str:
    """Return the installed-version token for a build."""
    return f"{VERSION_PREFIX}{build_number}"


def parse_build_number(version: str | None) -> int | None:
    """Extract the build number from a version token like ``sde-3142455``."""
    if not version:
        return None
    match = _VERSION_PATTERN.search(version)
    if match is None:
        return None
    return int(match.group(1))


def _parse_version_payload(contents: bytes, archive_path: Path) -> dict[str, Any]:
    lines = contents.decode("utf-8", errors="replace").strip().splitlines()
    first_line = lines[0].strip() if lines else ""
    try:
        payload = json.loads(first_line)
    except json.JSONDecodeError as error:
        raise VersionUnreadableError(
            f"Failed to parse {VERSION_MEMBER_NAME} in {archive_path}: {error.msg}."
        ) from error
    if not isinstance(payload, dict):
        raise VersionUnreadableError(
            f"Failed to parse {VERSION_MEMBER_NAME} in {archive_path}: expected JSON object."
        )
    return payload
