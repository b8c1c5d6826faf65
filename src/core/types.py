"""Shared typed models.

This module defines immutable data models used by ingest, mapping,
store, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Mapping, Union

from core.constants import DEFAULT_IMPORT_PROFILE

SourceRecord = Mapping[str, Any]
RowValue = Union[int, float, str, bool, None]
DestinationRow = dict[str, RowValue]
ImportStatus = Literal["success", "failed", "already_installed"]
VersionStatus = Literal["not_installed", "up_to_date", "update_available", "newer_than_latest"]


class LoadMode(str, Enum):
    """How a destination table receives rows during an import run."""

    REPLACE = "replace"
    MERGE = "merge"


@dataclass(frozen=True)
class MappedRow:
    """One destination row tagged with its destination table.

    Attributes:
        table: Destination table name.
        row: Ordered column-to-value mapping.
    """

    table: str
    row: DestinationRow


@dataclass(frozen=True)
class SdeVersion:
    """Version metadata of an export archive.

    Attributes:
        version: Canonical installed-version token, e.g. ``sde-3142455``.
        build_number: Numeric export build.
        release_date: Release date in ``YYYY-MM-DD`` form.
    """

    version: str
    build_number: int
    release_date: str


@dataclass(frozen=True)
class ReleaseInfo:
    """Latest release published by the remote metadata endpoint."""

    build_number: int
    release_date: str


@dataclass(frozen=True)
class ReleaseCheck:
    """Comparison of installed and latest published versions.

    Attributes:
        status: Installed-version status relative to latest release.
        update_available: Whether a newer release can be imported.
        latest: Latest published release.
        installed_version: Installed version token, if any.
        installed_build: Build parsed from installed token, if any.
    """

    status: VersionStatus
    update_available: bool
    latest: ReleaseInfo
    installed_version: str | None
    installed_build: int | None


@dataclass(frozen=True)
class ImportPlanEntry:
    """One planned source file import.

    Attributes:
        source_id: Source-file identifier, possibly virtual (``base:suffix``).
        member_name: Physical archive member read for this entry.
        table: Destination table name.
        load_mode: REPLACE or MERGE.
        key_column: Upsert key for MERGE tables.
        truncate_before: Whether this entry truncates its table before writing.
    """

    source_id: str
    member_name: str
    table: str
    load_mode: LoadMode
    key_column: str | None
    truncate_before: bool


@dataclass(frozen=True)
class ImportPlan:
    """Ordered import plan computed once per run.

    Attributes:
        entries: Entries in dependency order.
        skipped: Known source files present in the archive without a table.
    """

    entries: tuple[ImportPlanEntry, ...]
    skipped: tuple[str, ...] = ()


@dataclass(frozen=True)
class InstallOptions:
    """Install command options.

    Attributes:
        data_path: Optional archive or directory overriding config data path.
        build_number: Optional build whose archive should be installed.
        force: Re-import even when the version is already installed.
        profile: Import profile name selecting the ordered file list.
        chunk_size: Optional chunk size overriding config.
    """

    data_path: str | None = None
    build_number: int | None = None
    force: bool = False
    profile: str = DEFAULT_IMPORT_PROFILE
    chunk_size: int | None = None


@dataclass(frozen=True)
class ImportReport:
    """Run statistics returned by the import orchestrator.

    Attributes:
        status: Terminal status of the run.
        version: Version of the imported archive, when known.
        row_counts: Rows written per source-file identifier, in import order.
        skipped: Source files skipped because they have no table mapping.
        error: Error message for failed runs.
    """

    status: ImportStatus
    version: SdeVersion | None
    row_counts: Mapping[str, int] = field(default_factory=dict)
    skipped: tuple[str, ...] = ()
    error: str | None = None
