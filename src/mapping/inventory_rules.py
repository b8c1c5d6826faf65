"""Inventory, faction, station, and industry mapping rules."""

from __future__ import annotations

from typing import Any, Mapping

from core.types import DestinationRow, SourceRecord
from mapping.field_values import coordinate, nested_items, select_text, value_or
from mapping.rule_types import MappingRule, explode_rule, flat_rule


def map_type(record: SourceRecord) -> DestinationRow:
    return {
        "typeID": record.get("_key"),
        "groupID": record.get("groupID"),
        "typeName": select_text(record.get("name")),
        "description": select_text(record.get("description")),
        "mass": record.get("mass"),
        "volume": record.get("volume"),
        "capacity": record.get("capacity"),
        "portionSize": value_or(record, "portionSize", 1),
        "raceID": record.get("raceID"),
        "basePrice": record.get("basePrice"),
        "published": value_or(record, "published", False),
        "marketGroupID": record.get("marketGroupID"),
        "iconID": record.get("iconID"),
        "soundID": record.get("soundID"),
        "graphicID": record.get("graphicID"),
    }


def map_type_meta(record: SourceRecord) -> DestinationRow | None:
    """Map a type to its meta group; types without one produce no row."""
    if record.get("metaGroupID") is None:
        return None
    return {
        "typeID": record.get("_key"),
        # The export carries no variation parent, so a type is its own parent.
        "parentTypeID": record.get("_key"),
        "metaGroupID": record["metaGroupID"],
    }


def map_group(record: SourceRecord) -> DestinationRow:
    return {
        "groupID": record.get("_key"),
        "categoryID": record.get("categoryID"),
        "groupName": select_text(record.get("name")),
        "iconID": record.get("iconID"),
        "useBasePrice": value_or(record, "useBasePrice", False),
        "anchored": value_or(record, "anchored", False),
        "anchorable": value_or(record, "anchorable", False),
        "fittableNonSingleton": value_or(record, "fittableNonSingleton", False),
        "published": value_or(record, "published", False),
    }


def map_category(record: SourceRecord) -> DestinationRow:
    return {
        "categoryID": record.get("_key"),
        "categoryName": select_text(record.get("name")),
        "iconID": record.get("iconID"),
        "published": value_or(record, "published", False),
    }


def map_market_group(record: SourceRecord) -> DestinationRow:
    return {
        "marketGroupID": record.get("_key"),
        "parentGroupID": record.get("parentGroupID"),
        "marketGroupName": select_text(record.get("name")),
        "description": select_text(record.get("description")),
        "iconID": record.get("iconID"),
        "hasTypes": value_or(record, "hasTypes", False),
    }


def map_meta_group(record: SourceRecord) -> DestinationRow:
    return {
        "metaGroupID": record.get("_key"),
        "metaGroupName": select_text(record.get("name")),
        "description": select_text(record.get("description")),
        "iconID": record.get("iconID"),
    }


def map_flag(record: SourceRecord) -> DestinationRow:
    return {
        "flagID": record.get("_key"),
        "flagName": select_text(record.get("name")),
        "flagText": select_text(record.get("text")),
        "orderID": record.get("order"),
    }


def map_faction(record: SourceRecord) -> DestinationRow:
    return {
        "factionID": record.get("_key"),
        "factionName": select_text(record.get("name")),
        "description": select_text(record.get("description")),
        "solarSystemID": record.get("solarSystemID"),
        "corporationID": record.get("corporationID"),
        "sizeFactor": record.get("sizeFactor"),
        "stationCount": record.get("stationCount"),
        "stationSystemCount": record.get("stationSystemCount"),
        "militiaCorporationID": record.get("militiaCorporationID"),
        "iconID": record.get("iconID"),
    }


def map_npc_station(record: SourceRecord) -> DestinationRow:
    return {
        "stationID": record.get("_key"),
        "security": record.get("security"),
        "dockingCostPerVolume": record.get("dockingCostPerVolume"),
        "maxShipVolumeDockable": record.get("maxShipVolumeDockable"),
        "officeRentalCost": record.get("officeRentalCost"),
        "operationID": record.get("operationID"),
        "stationTypeID": record.get("stationTypeID"),
        "corporationID": record.get("corporationID"),
        "solarSystemID": record.get("solarSystemID"),
        "constellationID": record.get("constellationID"),
        "regionID": record.get("regionID"),
        "stationName": select_text(record.get("name")),
        "x": coordinate(record, "x", None),
        "y": coordinate(record, "y", None),
        "z": coordinate(record, "z", None),
        "reprocessingEfficiency": record.get("reprocessingEfficiency"),
        "reprocessingStationsTake": record.get("reprocessingStationsTake"),
        "reprocessingHangarFlag": record.get("reprocessingHangarFlag"),
    }


def map_corporation_activity(record: SourceRecord) -> DestinationRow:
    return {
        "activityID": record.get("_key"),
        "activityName": select_text(record.get("name")),
        "iconNo": record.get("iconNo"),
        "description": select_text(record.get("description")),
        "published": value_or(record, "published", False),
    }


def map_control_tower_resource_purpose(record: SourceRecord) -> DestinationRow:
    return {
        "purpose": record.get("_key"),
        "purposeText": select_text(record.get("name")),
    }


def map_planet_schematic(record: SourceRecord) -> DestinationRow:
    """Map a schematic with its output type.

    The output type is the first ``types`` entry flagged ``isInput: false``.
    Pins and input materials are not stored.
    """
    output_type_id = None
    for schematic_type in nested_items(record, "types"):
        if schematic_type.get("isInput") is False:
            output_type_id = schematic_type.get("_key")
            break
    return {
        "schematic_id": record.get("_key"),
        "cycle_time": record.get("cycleTime"),
        "schematic_name": select_text(record.get("name")),
        "type_id": output_type_id,
    }


def map_type_material(
    record: SourceRecord, _field_name: str, material: Mapping[str, Any]
) -> DestinationRow:
    return {
        "typeID": record.get("_key"),
        "materialTypeID": material.get("materialTypeID"),
        "quantity": material.get("quantity"),
    }


def map_type_reaction(
    record: SourceRecord, field_name: str, item: Mapping[str, Any]
) -> DestinationRow:
    return {
        "reactionTypeID": record.get("_key"),
        "input": field_name == "inputs",
        "typeID": item.get("_key"),
        "quantity": item.get("quantity"),
    }


def map_control_tower_resource(
    record: SourceRecord, _field_name: str, resource: Mapping[str, Any]
) -> DestinationRow:
    return {
        "controlTowerTypeID": record.get("_key"),
        "resourceTypeID": resource.get("resourceTypeID"),
        "purpose": resource.get("purpose"),
        "quantity": resource.get("quantity"),
        "minSecurityLevel": resource.get("minSecurityLevel"),
        "factionID": resource.get("factionID"),
    }


def map_contraband_faction(
    record: SourceRecord, _field_name: str, faction: Mapping[str, Any]
) -> DestinationRow:
    return {
        "typeID": record.get("_key"),
        "factionID": faction.get("_key"),
        "standingLoss": faction.get("standingLoss"),
        "confiscateMinSec": faction.get("confiscateMinSec"),
        "fineByValue": faction.get("fineByValue"),
        "attackMinSec": faction.get("attackMinSec"),
    }


INVENTORY_RULES: tuple[MappingRule, ...] = (
    flat_rule("types.jsonl", map_type),
    flat_rule("types:meta.jsonl", map_type_meta),
    flat_rule("groups.jsonl", map_group),
    flat_rule("categories.jsonl", map_category),
    flat_rule("marketGroups.jsonl", map_market_group),
    flat_rule("metaGroups.jsonl", map_meta_group),
    flat_rule("flags.jsonl", map_flag),
    flat_rule("factions.jsonl", map_faction),
    flat_rule("npcStations.jsonl", map_npc_station),
    flat_rule("corporationActivities.jsonl", map_corporation_activity),
    flat_rule("controlTowerResourcePurposes.jsonl", map_control_tower_resource_purpose),
    flat_rule("planetSchematics.jsonl", map_planet_schematic),
    explode_rule("typeMaterials.jsonl", ("materials",), map_type_material),
    # Input rows come before output rows for each reaction.
    explode_rule("typeReactions.jsonl", ("inputs", "outputs"), map_type_reaction),
    explode_rule("controlTowerResources.jsonl", ("resources",), map_control_tower_resource),
    explode_rule("contrabandTypes.jsonl", ("factions",), map_contraband_faction),
)
