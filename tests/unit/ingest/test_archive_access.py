"""Unit tests for export archive access."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import ArchiveUnreadableError, MemberNotFoundError
from ingest.archive_access import SdeArchive
from tests.sde_archive import build_archive


def test_list_members_filters_jsonl(tmp_path: Path) -> None:
    """Only .jsonl members should be listed."""
    archive_path = build_archive(
        tmp_path,
        {"types.jsonl": [{"_key": 1}], "readme.txt": "notes"},
    )

    with SdeArchive.open(archive_path) as archive:
        members = archive.list_members()

    assert sorted(members) == ["_sde.jsonl", "types.jsonl"]


def test_open_rejects_non_zip(tmp_path: Path) -> None:
    """A file that is not a zip container should be unreadable."""
    archive_path = tmp_path / "broken.zip"
    archive_path.write_text("not a zip", encoding="utf-8")

    with pytest.raises(ArchiveUnreadableError):
        SdeArchive.open(archive_path)


def test_read_member_raises_for_missing_member(tmp_path: Path) -> None:
    """Reading an absent member should raise MemberNotFoundError."""
    archive_path = build_archive(tmp_path, {})

    with SdeArchive.open(archive_path) as archive:
        with pytest.raises(MemberNotFoundError):
            archive.read_member("types.jsonl")


def test_staged_member_holds_member_bytes(tmp_path: Path) -> None:
    """Staged file should contain the member contents."""
    archive_path = build_archive(tmp_path, {"flags.jsonl": '{"_key": 4}\n'})

    with SdeArchive.open(archive_path) as archive:
        with archive.staged_member("flags.jsonl") as staged_path:
            contents = staged_path.read_text(encoding="utf-8")

    assert contents == '{"_key": 4}\n'


def test_staged_member_removed_after_block(tmp_path: Path) -> None:
    """Staged file should be deleted once the block exits."""
    archive_path = build_archive(tmp_path, {"flags.jsonl": [{"_key": 4}]})

    with SdeArchive.open(archive_path) as archive:
        with archive.staged_member("flags.jsonl") as staged_path:
            pass

    assert not staged_path.exists()


def test_staged_member_removed_after_error(tmp_path: Path) -> None:
    """Staged file should be deleted even when the block raises."""
    archive_path = build_archive(tmp_path, {"flags.jsonl": [{"_key": 4}]})
    staged_paths: list[Path] = []

    with SdeArchive.open(archive_path) as archive:
        with pytest.raises(RuntimeError):
            with archive.staged_member("flags.jsonl") as staged_path:
                staged_paths.append(staged_path)
                raise RuntimeError("consumer failed")

    assert not staged_paths[0].exists()
