"""Static source-file configuration.

This module lists the known export files, their destination tables,
load modes, and the dependency-ordered import profiles. Changing the
import order here also moves the truncate-once point of merge tables.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.constants import JSONL_SUFFIX, VIRTUAL_ID_SEPARATOR
from core.errors import SdeConfigError

TABLE_MAPPINGS: dict[str, str] = {
    # Inventory
    "types.jsonl": "invTypes",
    "groups.jsonl": "invGroups",
    "categories.jsonl": "invCategories",
    "marketGroups.jsonl": "invMarketGroups",
    "typeMaterials.jsonl": "invTypeMaterials",
    "controlTowerResources.jsonl": "invControlTowerResources",
    "controlTowerResourcePurposes.jsonl": "invControlTowerResourcePurposes",
    "metaGroups.jsonl": "invMetaGroups",
    "types:meta.jsonl": "invMetaTypes",
    "flags.jsonl": "invFlags",
    "contrabandTypes.jsonl": "invContrabandTypes",
    "typeReactions.jsonl": "invTypeReactions",
    # Factions
    "factions.jsonl": "chrFactions",
    # Universe
    "mapRegions.jsonl": "mapDenormalize",
    "mapConstellations.jsonl": "mapDenormalize",
    "mapSolarSystems.jsonl": "mapDenormalize",
    "mapStars.jsonl": "mapDenormalize",
    "mapPlanets.jsonl": "mapDenormalize",
    "mapMoons.jsonl": "mapDenormalize",
    # Stations
    "npcStations.jsonl": "staStations",
    # Dogma
    "dogmaAttributes.jsonl": "dgmAttributeTypes",
    "dogmaEffects.jsonl": "dgmEffects",
    "typeDogma.jsonl": "dgmTypeAttributes",
    "typeDogma:effects.jsonl": "dgmTypeEffects",
    # Industry
    "corporationActivities.jsonl": "ramActivities",
    # Planetary interaction
    "planetSchematics.jsonl": "universe_schematics",
}

MERGE_TABLE_KEYS: dict[str, str] = {
    "mapDenormalize": "itemID",
}


@dataclass(frozen=True)
class ImportProfile:
    """Ordered file list for one kind of import run.

    Attributes:
        name: Profile name used by the CLI.
        file_order: Source-file identifiers in dependency order.
        preserved_tables: Tables this profile only merges into, never truncates.
    """

    name: str
    file_order: tuple[str, ...]
    preserved_tables: frozenset[str] = frozenset()


FULL_IMPORT_ORDER: tuple[str, ...] = (
    # Core inventory
    "categories.jsonl",
    "groups.jsonl",
    "metaGroups.jsonl",
    "types:meta.jsonl",
    "types.jsonl",
    "marketGroups.jsonl",
    "typeMaterials.jsonl",
    # Universe, parents before children
    "mapRegions.jsonl",
    "mapConstellations.jsonl",
    "mapSolarSystems.jsonl",
    "mapStars.jsonl",
    "mapPlanets.jsonl",
    "mapMoons.jsonl",
    # Factions and contraband
    "factions.jsonl",
    "contrabandTypes.jsonl",
    # Stations and structures
    "npcStations.jsonl",
    "controlTowerResourcePurposes.jsonl",
    "controlTowerResources.jsonl",
    "flags.jsonl",
    # Dogma
    "dogmaAttributes.jsonl",
    "dogmaEffects.jsonl",
    "typeDogma.jsonl",
    "typeDogma:effects.jsonl",
    # Industry and planetary interaction
    "typeReactions.jsonl",
    "corporationActivities.jsonl",
    "planetSchematics.jsonl",
)

PLANET_IMPORT_ORDER: tuple[str, ...] = (
    "mapPlanets.jsonl",
    "mapMoons.jsonl",
    "planetSchematics.jsonl",
)

IMPORT_PROFILES: dict[str, ImportProfile] = {
    "full": ImportProfile(name="full", file_order=FULL_IMPORT_ORDER),
    "planet": ImportProfile(
        name="planet",
        file_order=PLANET_IMPORT_ORDER,
        preserved_tables=frozenset({"mapDenormalize"}),
    ),
}


def get_import_profile(name: str) -> ImportProfile:
    """Return a named import profile.

    Raises:
        SdeConfigError: If the profile is unknown.
    """
    profile = IMPORT_PROFILES.get(name)
    if profile is None:
        raise SdeConfigError(
            f"Unsupported import profile '{name}'. "
            f"Choose one of: {', '.join(sorted(IMPORT_PROFILES))}."
        )
    return profile


def split_source_id(source_id: str) -> tuple[str, str | None]:
    """Split a source identifier into physical member and virtual suffix.

    ``typeDogma:effects.jsonl`` becomes ``("typeDogma.jsonl", "effects")``;
    plain identifiers return ``(source_id, None)``.
    """
    if VIRTUAL_ID_SEPARATOR not in source_id:
        return source_id, None
    base, suffix = source_id.split(VIRTUAL_ID_SEPARATOR, 1)
    if suffix.endswith(JSONL_SUFFIX):
        suffix = suffix[: -len(JSONL_SUFFIX)]
    return f"{base}{JSONL_SUFFIX}", suffix


def member_name_for(source_id: str) -> str:
    """Return the archive member physically read for a source identifier."""
    return split_source_id(source_id)[0]
