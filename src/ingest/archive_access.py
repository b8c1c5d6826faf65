"""Random-access reader for export zip archives.

This module lists and extracts archive members. Members are staged
into scoped temporary files so the line reader streams them from disk
instead of holding whole members in memory.
"""

from __future__ import annotations

from contextlib import contextmanager
import os
from pathlib import Path
import shutil
import tempfile
from typing import BinaryIO, Iterator
import zipfile

from core.constants import JSONL_SUFFIX, STAGING_FILE_PREFIX
from core.errors import ArchiveUnreadableError, MemberNotFoundError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class SdeArchive:
    """Open handle on an export zip archive."""

    def __init__(self, archive_path: Path, zip_file: zipfile.ZipFile) -> None:
        self._archive_path = archive_path
        self._zip_file = zip_file

    @classmethod
    def open(cls, archive_path: Path) -> "SdeArchive":
        """Open an archive for member access.

        Args:
            archive_path: Path to a zip archive.

        Returns:
            Archive handle. Close it or use it as a context manager.

        Raises:
            ArchiveUnreadableError: If the container cannot be parsed.
        """
        try:
            zip_file = zipfile.ZipFile(archive_path)
        except (OSError, zipfile.BadZipFile) as error:
            raise ArchiveUnreadableError(
                f"Failed to open archive at {archive_path}: {error}. "
                "Provide a readable zip export and retry."
            ) from error
        return cls(archive_path, zip_file)

    def __enter__(self) -> "SdeArchive":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying zip handle."""
        self._zip_file.close()

    def list_members(self, suffix: str = JSONL_SUFFIX) -> list[str]:
        """List member names ending with a suffix, in archive order."""
        return [
            info.filename
            for info in self._zip_file.infolist()
            if not info.is_dir() and info.filename.endswith(suffix)
        ]

    def has_member(self, member_name: str) -> bool:
        """Return whether the archive holds a member with this exact name."""
        try:
            self._zip_file.getinfo(member_name)
        except KeyError:
            return False
        return True

    def read_member(self, member_name: str) -> bytes:
        """Read a whole member into memory.

        Args:
            member_name: Exact member name.

        Returns:
            Raw member bytes.

        Raises:
            MemberNotFoundError: If member is absent.
            ArchiveUnreadableError: If member data is corrupt.
        """
        self._require_member(member_name)
        try:
            return self._zip_file.read(member_name)
        except (OSError, zipfile.BadZipFile) as error:
            raise ArchiveUnreadableError(
                f"Failed to read {member_name} from {self._archive_path}: {error}."
            ) from error

    @contextmanager
    def staged_member(self, member_name: str) -> Iterator[Path]:
        """Extract a member into a temporary file for the duration of a block.

        The file is removed on every exit path, including errors raised
        by the caller while consuming it.

        Args:
            member_name: Exact member name.

        Yields:
            Path of the staged temporary file.

        Raises:
            MemberNotFoundError: If member is absent.
            ArchiveUnreadableError: If member data is corrupt.
        """
        self._require_member(member_name)
        file_descriptor, staged_name = tempfile.mkstemp(
            prefix=STAGING_FILE_PREFIX,
            suffix=f"-{Path(member_name).name}",
        )
        staged_path = Path(staged_name)
        try:
            with os.fdopen(file_descriptor, "wb") as staged_file:
                self._copy_member(member_name, staged_file)
            yield staged_path
        finally:
            staged_path.unlink(missing_ok=True)
            _LOGGER.debug("staged_member_removed", member=member_name, path=str(staged_path))

    def _copy_member(self, member_name: str, target: BinaryIO) -> None:
        try:
            with self._zip_file.open(member_name) as member_stream:
                shutil.copyfileobj(member_stream, target)
        except (OSError, zipfile.BadZipFile) as error:
            raise ArchiveUnreadableError(
                f"Failed to extract {member_name} from {self._archive_path}: {error}. "
                "Download the archive again and retry."
            ) from error

    def _require_member(self, member_name: str) -> None:
        if not self.has_member(member_name):
            raise MemberNotFoundError(
                f"Member {member_name} not found in archive {self._archive_path}."
            )
