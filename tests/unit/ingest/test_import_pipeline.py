"""Unit tests for the import orchestrator."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Sequence

import pytest

from core.config import SdeConfig
from core.errors import SdeConfigError, SdeImportError, SinkWriteError
from core.types import DestinationRow, InstallOptions
from ingest.import_pipeline import SdeImportRunner, import_sde, resolve_install_path
from store.memory_sink import InMemorySink
from tests.sde_archive import build_archive

_REGIONS = [
    {"_key": 10000001, "name": {"en": "Derelik"}, "position": {"x": 1.0, "y": 2.0, "z": 3.0}},
    {"_key": 10000002, "name": {"en": "The Forge"}},
]
_CONSTELLATIONS = [
    {"_key": 20000001, "regionID": 10000001, "name": {"en": "San Matar"}},
]


class _RejectingSink(InMemorySink):
    """In-memory sink that rejects every insert into invGroups."""

    def insert_batch(self, table: str, rows: Sequence[DestinationRow]) -> None:
        if table == "invGroups":
            raise SinkWriteError(f"Failed to write {len(rows)} rows into {table}: disk full.")
        super().insert_batch(table, rows)


def _config(tmp_path: Path, chunk_size: int = 1000) -> SdeConfig:
    return replace(
        SdeConfig.from_env(),
        data_path=tmp_path / "sde",
        state_root=tmp_path / "state",
        chunk_size=chunk_size,
    )


def test_import_reports_row_counts(tmp_path: Path) -> None:
    """Report should carry one row count per imported file."""
    config = _config(tmp_path)
    build_archive(config.data_path, {"mapRegions.jsonl": _REGIONS})

    report = import_sde(InstallOptions(), config, InMemorySink())

    assert report.row_counts == {"mapRegions.jsonl": 2}


def test_small_chunks_split_batches(tmp_path: Path) -> None:
    """Three rows with chunk size two should produce two insert batches."""
    config = _config(tmp_path, chunk_size=2)
    categories = [{"_key": key, "name": {"en": f"c{key}"}} for key in (1, 2, 3)]
    build_archive(config.data_path, {"categories.jsonl": categories})
    sink = InMemorySink()

    import_sde(InstallOptions(), config, sink)

    assert sink.count("insert", "invCategories") == 2


def test_merge_table_truncated_once_per_run(tmp_path: Path) -> None:
    """Several files feeding mapDenormalize should truncate it once."""
    config = _config(tmp_path)
    build_archive(
        config.data_path,
        {"mapRegions.jsonl": _REGIONS, "mapConstellations.jsonl": _CONSTELLATIONS},
    )
    sink = InMemorySink()

    import_sde(InstallOptions(), config, sink)

    assert sink.count("truncate", "mapDenormalize") == 1


def test_truncate_precedes_first_write(tmp_path: Path) -> None:
    """The truncate should be the first primitive applied to its table."""
    config = _config(tmp_path)
    build_archive(config.data_path, {"mapRegions.jsonl": _REGIONS})
    sink = InMemorySink()

    import_sde(InstallOptions(), config, sink)

    actions = [op.action for op in sink.operations if op.table == "mapDenormalize"]
    assert actions == ["truncate", "upsert"]


def test_empty_first_file_still_truncates(tmp_path: Path) -> None:
    """A replace table whose file has no rows should still be truncated."""
    config = _config(tmp_path)
    build_archive(config.data_path, {"categories.jsonl": ""})
    sink = InMemorySink()

    import_sde(InstallOptions(), config, sink)

    assert sink.count("truncate", "invCategories") == 1


def test_repeated_merge_import_is_idempotent(tmp_path: Path) -> None:
    """Importing the same archive twice should leave the same rows."""
    config = _config(tmp_path)
    build_archive(
        config.data_path,
        {"mapRegions.jsonl": _REGIONS, "mapConstellations.jsonl": _CONSTELLATIONS},
    )
    sink = InMemorySink()

    import_sde(InstallOptions(), config, sink)
    first_rows = sink.rows("mapDenormalize")
    import_sde(InstallOptions(), config, sink)

    assert sink.rows("mapDenormalize") == first_rows


def test_malformed_member_fails_with_report(tmp_path: Path) -> None:
    """A malformed line should abort the run with a failed report."""
    config = _config(tmp_path)
    build_archive(
        config.data_path,
        {"categories.jsonl": [{"_key": 1}], "groups.jsonl": '{"_key": 2}\n{oops\n'},
    )

    with pytest.raises(SdeImportError) as error_info:
        import_sde(InstallOptions(), config, InMemorySink())

    assert error_info.value.report.status == "failed"


def test_failed_report_keeps_completed_counts(tmp_path: Path) -> None:
    """Files imported before a failure should keep their row counts."""
    config = _config(tmp_path)
    build_archive(
        config.data_path,
        {"categories.jsonl": [{"_key": 1}], "groups.jsonl": "{oops\n"},
    )

    with pytest.raises(SdeImportError) as error_info:
        import_sde(InstallOptions(), config, InMemorySink())

    assert error_info.value.report.row_counts["categories.jsonl"] == 1


def test_sink_rejection_stops_run(tmp_path: Path) -> None:
    """A rejected batch should fail the run before later files are loaded."""
    config = _config(tmp_path)
    build_archive(
        config.data_path,
        {
            "categories.jsonl": [{"_key": 1}],
            "groups.jsonl": [{"_key": 2, "categoryID": 1}],
            "types.jsonl": [{"_key": 3, "groupID": 2}],
        },
    )
    sink = _RejectingSink()

    with pytest.raises(SdeImportError) as error_info:
        import_sde(InstallOptions(), config, sink)

    report = error_info.value.report
    assert (
        report.status,
        report.row_counts,
        [op.action for op in sink.operations if op.table == "invTypes"],
    ) == ("failed", {"categories.jsonl": 1, "groups.jsonl": 0}, [])


def test_missing_archive_fails_before_sink_calls(tmp_path: Path) -> None:
    """Discovery errors should happen before any sink primitive."""
    config = _config(tmp_path)
    config.data_path.mkdir(parents=True)
    sink = InMemorySink()

    with pytest.raises(SdeImportError):
        import_sde(InstallOptions(), config, sink)

    assert sink.operations == []


def test_invalid_chunk_size_option_is_rejected(tmp_path: Path) -> None:
    """A chunk size below one should be a configuration error."""
    with pytest.raises(SdeConfigError):
        SdeImportRunner(InstallOptions(chunk_size=0), _config(tmp_path), InMemorySink())


def test_build_number_selects_archive_in_data_dir(tmp_path: Path) -> None:
    """A build number should name the archive inside the data directory."""
    config = _config(tmp_path)
    config.data_path.mkdir(parents=True)

    path = resolve_install_path(InstallOptions(build_number=3142455), config)

    assert path.name == "eve-online-static-data-3142455-jsonl.zip"
