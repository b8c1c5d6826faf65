"""Import plan construction.

This module intersects the files present in an archive with the
ordered file list of an import profile. Truncate points are decided
here once per run, so the pipeline never tracks per-table state.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from core.constants import JSONL_SUFFIX, VIRTUAL_ID_SEPARATOR
from core.logging_config import get_logger
from core.types import ImportPlan, ImportPlanEntry, LoadMode
from mapping.source_files import (
    MERGE_TABLE_KEYS,
    TABLE_MAPPINGS,
    ImportProfile,
    member_name_for,
)

_LOGGER = get_logger(__name__)


def discover_source_ids(
    member_names: Iterable[str],
    table_mappings: Mapping[str, str] = TABLE_MAPPINGS,
) -> set[str]:
    """Return source identifiers available in an archive.

    Physical ``.jsonl`` members are available as themselves. Virtual
    ``base:suffix`` identifiers are available when their base member is.

    Args:
        member_names: Archive member names.
        table_mappings: Known source identifiers and their tables.

    Returns:
        Available source identifiers.
    """
    available = {name for name in member_names if name.endswith(JSONL_SUFFIX)}
    for source_id in table_mappings:
        if VIRTUAL_ID_SEPARATOR in source_id and member_name_for(source_id) in available:
            available.add(source_id)
    return available


def build_import_plan(
    available_ids: Iterable[str],
    profile: ImportProfile,
    table_mappings: Mapping[str, str] = TABLE_MAPPINGS,
    merge_keys: Mapping[str, str] = MERGE_TABLE_KEYS,
) -> ImportPlan:
    """Build the ordered import plan for one run.

    Args:
        available_ids: Source identifiers present in the archive.
        profile: Import profile providing dependency order.
        table_mappings: Source identifier to destination table mapping.
        merge_keys: MERGE tables and their upsert key columns.

    Returns:
        Plan with one entry per present and mapped file, in profile order.
        The first entry of each table truncates it unless the profile
        preserves that table.
    """
    available = set(available_ids)
    entries: list[ImportPlanEntry] = []
    skipped: list[str] = []
    planned_tables: set[str] = set()
    for source_id in profile.file_order:
        if source_id not in available:
            continue
        table = table_mappings.get(source_id)
        if table is None:
            _LOGGER.warning("file_unmapped", source_id=source_id, profile=profile.name)
            skipped.append(source_id)
            continue
        key_column = merge_keys.get(table)
        entries.append(
            ImportPlanEntry(
                source_id=source_id,
                member_name=member_name_for(source_id),
                table=table,
                load_mode=LoadMode.MERGE if key_column else LoadMode.REPLACE,
                key_column=key_column,
                truncate_before=(
                    table not in planned_tables and table not in profile.preserved_tables
                ),
            )
        )
        planned_tables.add(table)
    return ImportPlan(entries=tuple(entries), skipped=tuple(skipped))
