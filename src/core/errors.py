"""Sdeload exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type for debuggability.
"""

from __future__ import annotations

from typing import Any


class SdeError(Exception):
    """Base exception for all sdeload failures."""


class SdeConfigError(SdeError):
    """Raised for invalid runtime configuration."""


class ArchiveUnreadableError(SdeError):
    """Raised when an export archive cannot be opened or parsed."""


class MemberNotFoundError(SdeError):
    """Raised when a named member is absent from an archive."""


class MalformedRecordError(SdeError):
    """Raised when a line of a JSONL source cannot be decoded.

    Attributes:
        source_id: Identifier of the file or member being read.
        line_number: One-based line number of the offending line.
        diagnostic: Underlying decoder message.
    """

    def __init__(self, source_id: str, line_number: int, diagnostic: str) -> None:
        super().__init__(
            f"Failed to parse JSONL record at {source_id}:{line_number}: {diagnostic}. "
            "The archive is likely corrupt; download it again and retry the import."
        )
        self.source_id = source_id
        self.line_number = line_number
        self.diagnostic = diagnostic


class VersionUnreadableError(SdeError):
    """Raised when export version metadata is missing or invalid."""


class NoArchiveFoundError(SdeError):
    """Raised when no export archive can be located at a data path."""


class SdeMappingError(SdeError):
    """Raised when mapped rows violate destination table contracts."""


class SinkWriteError(SdeError):
    """Raised when the storage sink rejects a truncate or batch write."""


class ReleaseCheckError(SdeError):
    """Raised when remote release metadata cannot be fetched or parsed."""


class SdeImportError(SdeError):
    """Raised when an import run aborts.

    Attributes:
        report: Failed import report with row counts collected so far.
    """

    def __init__(self, message: str, report: Any) -> None:
        super().__init__(message)
        self.report = report
