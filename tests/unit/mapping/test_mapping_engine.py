"""Unit tests for mapping dispatch, universe, and dogma rules."""

from __future__ import annotations

from mapping.mapping_engine import map_record, registered_rules, resolve_rule
from mapping.source_files import TABLE_MAPPINGS
from mapping.table_schemas import get_table_schema


def test_unknown_file_uses_passthrough_rule() -> None:
    """Unknown files should rename _key to id and resolve text."""
    rows = map_record("skins.jsonl", {"_key": 7, "name": {"en": "Glacial Drift"}})

    assert rows[0].row == {"id": 7, "name": "Glacial Drift"}


def test_unknown_file_table_from_stem() -> None:
    """Passthrough rows should target a table named after the file."""
    assert resolve_rule("skins.jsonl").table == "skins"


def test_passthrough_keeps_records_without_language() -> None:
    """Records whose language entries are all null should load with a null name."""
    rows = map_record("skins.jsonl", {"_key": 8, "name": {"en": None, "fr": None}})

    assert rows[0].row["name"] is None


def test_virtual_id_routes_to_nested_rule() -> None:
    """typeDogma:effects should route to the effects sub-rule."""
    record = {
        "_key": 587,
        "dogmaAttributes": [{"attributeID": 4, "value": 1.0}],
        "dogmaEffects": [{"effectID": 11, "isDefault": True}],
    }

    rows = map_record("typeDogma:effects.jsonl", record)

    assert [(row.table, row.row["effectID"]) for row in rows] == [("dgmTypeEffects", 11)]


def test_type_attributes_split_numeric_values() -> None:
    """Dogma attribute values should land in valueInt or valueFloat."""
    record = {
        "_key": 587,
        "dogmaAttributes": [
            {"attributeID": 4, "value": 2147483648},
            {"attributeID": 9, "value": 350},
        ],
    }

    rows = map_record("typeDogma.jsonl", record)

    assert [(row.row["valueInt"], row.row["valueFloat"]) for row in rows] == [
        (None, 2147483648.0),
        (350, None),
    ]


def test_dogma_effect_encodes_modifier_info() -> None:
    """Effect modifier info should be stored as JSON text."""
    record = {"_key": 11, "name": "online", "modifierInfo": [{"func": "ItemModifier"}]}

    rows = map_record("dogmaEffects.jsonl", record)

    assert rows[0].row["modifierInfo"] == '[{"func": "ItemModifier"}]'


def test_solar_system_type_comes_from_star() -> None:
    """Solar systems should take their typeID from the star."""
    record = {"_key": 30000142, "star": {"typeID": 3802}, "name": {"en": "Jita"}}

    rows = map_record("mapSolarSystems.jsonl", record)

    assert rows[0].row["typeID"] == 3802


def test_solar_system_security_defaults_to_zero() -> None:
    """Missing security should default to 0.0."""
    rows = map_record("mapSolarSystems.jsonl", {"_key": 30000142})

    assert rows[0].row["security"] == 0.0


def test_region_group_and_position_defaults() -> None:
    """Regions should carry group 3 and zeroed coordinates when absent."""
    rows = map_record("mapRegions.jsonl", {"_key": 10000002})

    assert (rows[0].row["groupID"], rows[0].row["x"]) == (3, 0.0)


def test_moon_rows_use_group_eight() -> None:
    """Moons should load into mapDenormalize with group 8."""
    rows = map_record("mapMoons.jsonl", {"_key": 40000002, "solarSystemID": 30000001})

    assert (rows[0].table, rows[0].row["groupID"]) == ("mapDenormalize", 8)


def test_registered_rules_match_table_mappings() -> None:
    """Every registered rule should target its configured table."""
    mismatched = [
        rule.source_id
        for rule in registered_rules()
        if TABLE_MAPPINGS[rule.source_id] != rule.table
    ]

    assert mismatched == []


def test_registered_rules_emit_schema_columns() -> None:
    """Every column a rule emits should exist in its table schema."""
    samples = {
        "types.jsonl": {"_key": 1},
        "mapSolarSystems.jsonl": {"_key": 2},
        "dogmaEffects.jsonl": {"_key": 3},
        "factions.jsonl": {"_key": 4},
    }
    unknown_columns = []
    for source_id, record in samples.items():
        for mapped in map_record(source_id, record):
            schema = get_table_schema(mapped.table)
            unknown_columns.extend(
                column for column in mapped.row if column not in schema.column_names
            )

    assert unknown_columns == []


def test_passthrough_encodes_unrecognized_mappings() -> None:
    """Mappings without a known language should be stored as JSON text."""
    rows = map_record("skins.jsonl", {"_key": 9, "name": {"ja": "x"}})

    assert rows[0].row["name"] == '{"ja": "x"}'


def test_rule_kinds_follow_routing_and_nested_fields() -> None:
    """Rules should report flat, explode, or nested from their definition."""
    kinds = [
        resolve_rule(source_id).kind
        for source_id in ("types.jsonl", "typeReactions.jsonl", "typeDogma:effects.jsonl")
    ]

    assert kinds == ["flat", "explode", "nested"]


def test_explode_rules_declare_nested_fields() -> None:
    """Every explode rule should name the array fields it expands."""
    undeclared = [
        rule.source_id
        for rule in registered_rules()
        if rule.kind == "explode" and not rule.nested_fields
    ]

    assert (undeclared, resolve_rule("typeReactions.jsonl").nested_fields) == (
        [],
        ("inputs", "outputs"),
    )
