"""Import orchestration for export archives.

This module runs DISCOVER, PLAN, then STAGE, STREAM and LOAD for each
planned file, and finally REPORT. Rows are buffered per file in chunks
of bounded size. Truncation happens lazily, right before the first
chunk of an entry reaches the sink, so an empty first file still
truncates its table exactly once.
"""

from __future__ import annotations

from pathlib import Path

from core.config import SdeConfig
from core.constants import ARCHIVE_FILE_TEMPLATE
from core.errors import SdeConfigError, SdeError, SdeImportError, SdeMappingError
from core.logging_config import get_logger
from core.types import (
    DestinationRow,
    ImportPlan,
    ImportPlanEntry,
    ImportReport,
    InstallOptions,
    LoadMode,
    SdeVersion,
)
from ingest.archive_access import SdeArchive
from ingest.import_plan import build_import_plan, discover_source_ids
from ingest.line_reader import read_jsonl_file
from ingest.version_reader import read_sde_version, resolve_archive_path
from mapping.mapping_engine import map_record
from mapping.source_files import get_import_profile
from store.storage_sink import StorageSink

_LOGGER = get_logger(__name__)


class SdeImportRunner:
    """Runner for one import of an export archive into a storage sink."""

    def __init__(self, options: InstallOptions, config: SdeConfig, sink: StorageSink) -> None:
        self._options = options
        self._config = config
        self._sink = sink
        self._profile = get_import_profile(options.profile)
        self._chunk_size = _resolve_chunk_size(options, config)
        self._row_counts: dict[str, int] = {}
        self._plan = ImportPlan(entries=())
        self._version: SdeVersion | None = None

    def run(self) -> ImportReport:
        """Execute the import and return its report.

        Returns:
            Successful import report with per-file row counts.

        Raises:
            SdeImportError: If any stage fails. The error carries a failed
                report with the counts collected before the failure.
        """
        try:
            return self._run_stages()
        except SdeError as error:
            report = ImportReport(
                status="failed",
                version=self._version,
                row_counts=dict(self._row_counts),
                skipped=self._plan.skipped,
                error=str(error),
            )
            _LOGGER.error(
                "import_failed",
                version=self._version.version if self._version else None,
                error=str(error),
                files_completed=len(self._row_counts),
            )
            raise SdeImportError(f"SDE import failed: {error}", report) from error

    def _run_stages(self) -> ImportReport:
        archive_path = resolve_archive_path(resolve_install_path(self._options, self._config))
        self._version = read_sde_version(archive_path)
        with SdeArchive.open(archive_path) as archive:
            available_ids = discover_source_ids(archive.list_members())
            self._plan = build_import_plan(available_ids, self._profile)
            _LOGGER.info(
                "import_started",
                archive=str(archive_path),
                version=self._version.version,
                profile=self._profile.name,
                files=len(self._plan.entries),
                chunk_size=self._chunk_size,
            )
            for entry in self._plan.entries:
                self._import_entry(archive, entry)
        total_rows = sum(self._row_counts.values())
        _LOGGER.info(
            "import_completed",
            version=self._version.version,
            files=len(self._row_counts),
            rows=total_rows,
            skipped=len(self._plan.skipped),
        )
        return ImportReport(
            status="success",
            version=self._version,
            row_counts=dict(self._row_counts),
            skipped=self._plan.skipped,
        )

    def _import_entry(self, archive: SdeArchive, entry: ImportPlanEntry) -> None:
        _LOGGER.info(
            "file_import_started",
            source_id=entry.source_id,
            table=entry.table,
            load_mode=entry.load_mode.value,
        )
        loader = _EntryLoader(self._sink, entry, self._chunk_size)
        try:
            with archive.staged_member(entry.member_name) as staged_path:
                for record in read_jsonl_file(staged_path, entry.source_id):
                    for mapped in map_record(entry.source_id, record):
                        if mapped.table != entry.table:
                            raise SdeMappingError(
                                f"Mapping for {entry.source_id} produced a row for table "
                                f"{mapped.table}, expected {entry.table}."
                            )
                        loader.add(mapped.row)
            loader.finish()
        finally:
            self._row_counts[entry.source_id] = loader.rows_written
        _LOGGER.info(
            "file_import_completed",
            source_id=entry.source_id,
            table=entry.table,
            rows=loader.rows_written,
        )


class _EntryLoader:
    """Chunked writer for the rows of one plan entry."""

    def __init__(self, sink: StorageSink, entry: ImportPlanEntry, chunk_size: int) -> None:
        self._sink = sink
        self._entry = entry
        self._chunk_size = chunk_size
        self._buffer: list[DestinationRow] = []
        self._truncated = False
        self.rows_written = 0

    def add(self, row: DestinationRow) -> None:
        self._buffer.append(row)
        if len(self._buffer) >= self._chunk_size:
            self.flush()

    def flush(self) -> None:
        if not self._buffer:
            return
        self._truncate_once()
        entry = self._entry
        if entry.load_mode is LoadMode.MERGE and entry.key_column:
            self._sink.upsert_batch(entry.table, self._buffer, entry.key_column)
        else:
            self._sink.insert_batch(entry.table, self._buffer)
        self.rows_written += len(self._buffer)
        _LOGGER.debug(
            "chunk_flushed",
            source_id=entry.source_id,
            table=entry.table,
            rows=len(self._buffer),
        )
        self._buffer = []

    def finish(self) -> None:
        self.flush()
        self._truncate_once()

    def _truncate_once(self) -> None:
        if self._truncated or not self._entry.truncate_before:
            return
        self._sink.truncate(self._entry.table)
        self._truncated = True
        _LOGGER.info("table_truncated", table=self._entry.table, source_id=self._entry.source_id)


def _resolve_chunk_size(options: InstallOptions, config: SdeConfig) -> int:
    if options.chunk_size is None:
        return config.chunk_size
    if options.chunk_size < 1:
        raise SdeConfigError(
            f"Invalid chunk size: expected at least 1, got {options.chunk_size}."
        )
    return options.chunk_size


def resolve_install_path(options: InstallOptions, config: SdeConfig) -> Path:
    """Return the archive file or directory an install should read.

    An explicit ``data_path`` wins. A build number selects the archive
    named after that build, next to the configured data path.
    """
    if options.data_path:
        return Path(options.data_path).expanduser().resolve()
    if options.build_number is None:
        return config.data_path
    file_name = ARCHIVE_FILE_TEMPLATE.format(build_number=options.build_number)
    if config.data_path.is_dir():
        return config.data_path / file_name
    return config.data_path.parent / file_name


def import_sde(options: InstallOptions, config: SdeConfig, sink: StorageSink) -> ImportReport:
    """Import an export archive into a storage sink.

    Args:
        options: Install options selecting archive, profile and chunk size.
        config: Runtime configuration.
        sink: Destination storage sink.

    Returns:
        Successful import report.

    Raises:
        SdeImportError: If the import fails.
    """
    return SdeImportRunner(options, config, sink).run()
