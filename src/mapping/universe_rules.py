"""Universe mapping rules for the denormalized map table.

Regions, constellations, solar systems, stars, planets, and moons all
load into ``mapDenormalize``. Each kind carries a fixed group tag and
the hierarchical foreign keys its source record provides.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.types import DestinationRow, SourceRecord
from mapping.field_values import coordinate, select_text, value_or
from mapping.rule_types import MappingRule, flat_rule

REGION_GROUP_ID = 3
CONSTELLATION_GROUP_ID = 4
SOLAR_SYSTEM_GROUP_ID = 5
STAR_GROUP_ID = 6
PLANET_GROUP_ID = 7
MOON_GROUP_ID = 8


def _position(record: SourceRecord) -> DestinationRow:
    return {
        "x": coordinate(record, "x", 0.0),
        "y": coordinate(record, "y", 0.0),
        "z": coordinate(record, "z", 0.0),
    }


def map_region(record: SourceRecord) -> DestinationRow:
    region_id = record.get("_key")
    return {
        "itemID": region_id,
        "typeID": region_id,
        "groupID": REGION_GROUP_ID,
        "regionID": region_id,
        "itemName": select_text(record.get("name")),
        **_position(record),
    }


def map_constellation(record: SourceRecord) -> DestinationRow:
    constellation_id = record.get("_key")
    return {
        "itemID": constellation_id,
        "typeID": constellation_id,
        "groupID": CONSTELLATION_GROUP_ID,
        "regionID": record.get("regionID"),
        "constellationID": constellation_id,
        "itemName": select_text(record.get("name")),
        **_position(record),
    }


def map_solar_system(record: SourceRecord) -> DestinationRow:
    system_id = record.get("_key")
    star: Any = record.get("star")
    star_type_id = star.get("typeID") if isinstance(star, Mapping) else None
    return {
        "itemID": system_id,
        "typeID": system_id if star_type_id is None else star_type_id,
        "groupID": SOLAR_SYSTEM_GROUP_ID,
        "regionID": record.get("regionID"),
        "constellationID": record.get("constellationID"),
        "solarSystemID": system_id,
        "itemName": select_text(record.get("name")),
        **_position(record),
        "security": value_or(record, "security", 0.0),
    }


def map_star(record: SourceRecord) -> DestinationRow:
    return {
        "itemID": record.get("_key"),
        "typeID": record.get("typeID"),
        "groupID": STAR_GROUP_ID,
        "solarSystemID": record.get("solarSystemID"),
        "itemName": select_text(record.get("name")),
        "radius": record.get("radius"),
    }


def map_planet(record: SourceRecord) -> DestinationRow:
    return {
        "itemID": record.get("_key"),
        "typeID": record.get("typeID"),
        "groupID": PLANET_GROUP_ID,
        "solarSystemID": record.get("solarSystemID"),
        "itemName": select_text(record.get("name")),
    }


def map_moon(record: SourceRecord) -> DestinationRow:
    return {
        "itemID": record.get("_key"),
        "typeID": record.get("typeID"),
        "groupID": MOON_GROUP_ID,
        "solarSystemID": record.get("solarSystemID"),
        "itemName": select_text(record.get("name")),
        **_position(record),
    }


UNIVERSE_RULES: tuple[MappingRule, ...] = (
    flat_rule("mapRegions.jsonl", map_region),
    flat_rule("mapConstellations.jsonl", map_constellation),
    flat_rule("mapSolarSystems.jsonl", map_solar_system),
    flat_rule("mapStars.jsonl", map_star),
    flat_rule("mapPlanets.jsonl", map_planet),
    flat_rule("mapMoons.jsonl", map_moon),
)
