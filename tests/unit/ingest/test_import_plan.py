"""Unit tests for import plan construction."""

from __future__ import annotations

from core.types import LoadMode
from ingest.import_plan import build_import_plan, discover_source_ids
from mapping.source_files import ImportProfile, get_import_profile


def test_absent_files_are_skipped_silently() -> None:
    """Files missing from the archive should not appear in the plan."""
    profile = ImportProfile(
        name="demo",
        file_order=("categories.jsonl", "groups.jsonl", "types.jsonl"),
    )

    plan = build_import_plan({"categories.jsonl", "types.jsonl"}, profile)

    assert [entry.source_id for entry in plan.entries] == ["categories.jsonl", "types.jsonl"]


def test_unmapped_files_are_reported_as_skipped() -> None:
    """Known files without a table mapping should be listed as skipped."""
    profile = ImportProfile(name="demo", file_order=("types.jsonl", "skins.jsonl"))

    plan = build_import_plan({"types.jsonl", "skins.jsonl"}, profile)

    assert plan.skipped == ("skins.jsonl",)


def test_merge_table_truncates_on_first_entry_only() -> None:
    """Only the first mapDenormalize entry should truncate."""
    profile = get_import_profile("full")
    available = {"mapRegions.jsonl", "mapConstellations.jsonl", "mapSolarSystems.jsonl"}

    plan = build_import_plan(available, profile)

    assert [entry.truncate_before for entry in plan.entries] == [True, False, False]


def test_merge_table_entries_use_merge_mode() -> None:
    """mapDenormalize entries should upsert on itemID."""
    plan = build_import_plan({"mapRegions.jsonl"}, get_import_profile("full"))

    entry = plan.entries[0]

    assert (entry.load_mode, entry.key_column) == (LoadMode.MERGE, "itemID")


def test_planet_profile_never_truncates_map_table() -> None:
    """The planet profile should merge into mapDenormalize without truncating."""
    plan = build_import_plan(
        {"mapPlanets.jsonl", "mapMoons.jsonl"},
        get_import_profile("planet"),
    )

    assert not any(entry.truncate_before for entry in plan.entries)


def test_virtual_entry_reads_base_member() -> None:
    """Virtual identifiers should stage their physical base member."""
    available = discover_source_ids(["typeDogma.jsonl"])
    plan = build_import_plan(available, get_import_profile("full"))

    members = {entry.source_id: entry.member_name for entry in plan.entries}

    assert members["typeDogma:effects.jsonl"] == "typeDogma.jsonl"


def test_discover_skips_virtual_ids_without_base() -> None:
    """Virtual identifiers need their base member in the archive."""
    available = discover_source_ids(["groups.jsonl"])

    assert "types:meta.jsonl" not in available
