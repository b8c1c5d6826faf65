"""Destination table schemas.

This module declares the fixed column set of every destination table.
Rules emit subsets of these columns; unset columns load as NULL.
"""

from __future__ import annotations

from dataclasses import dataclass

BIGINT = "BIGINT"
INTEGER = "INTEGER"
DOUBLE = "DOUBLE"
VARCHAR = "VARCHAR"
BOOLEAN = "BOOLEAN"


@dataclass(frozen=True)
class TableSchema:
    """Column layout of one destination table.

    Attributes:
        name: Destination table name.
        columns: Ordered ``(column, sql_type)`` pairs.
        key_column: Primary key column, required for MERGE tables.
    """

    name: str
    columns: tuple[tuple[str, str], ...]
    key_column: str | None = None

    @classmethod
    def of(cls, name: str, key_column: str | None = None, **columns: str) -> "TableSchema":
        return cls(name=name, columns=tuple(columns.items()), key_column=key_column)

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(column for column, _ in self.columns)


_SCHEMAS = (
    TableSchema.of(
        "invTypes",
        typeID=BIGINT,
        groupID=BIGINT,
        typeName=VARCHAR,
        description=VARCHAR,
        mass=DOUBLE,
        volume=DOUBLE,
        capacity=DOUBLE,
        portionSize=INTEGER,
        raceID=BIGINT,
        basePrice=DOUBLE,
        published=BOOLEAN,
        marketGroupID=BIGINT,
        iconID=BIGINT,
        soundID=BIGINT,
        graphicID=BIGINT,
    ),
    TableSchema.of(
        "invGroups",
        groupID=BIGINT,
        categoryID=BIGINT,
        groupName=VARCHAR,
        iconID=BIGINT,
        useBasePrice=BOOLEAN,
        anchored=BOOLEAN,
        anchorable=BOOLEAN,
        fittableNonSingleton=BOOLEAN,
        published=BOOLEAN,
    ),
    TableSchema.of(
        "invCategories",
        categoryID=BIGINT,
        categoryName=VARCHAR,
        iconID=BIGINT,
        published=BOOLEAN,
    ),
    TableSchema.of(
        "invMarketGroups",
        marketGroupID=BIGINT,
        parentGroupID=BIGINT,
        marketGroupName=VARCHAR,
        description=VARCHAR,
        iconID=BIGINT,
        hasTypes=BOOLEAN,
    ),
    TableSchema.of(
        "invMetaGroups",
        metaGroupID=BIGINT,
        metaGroupName=VARCHAR,
        description=VARCHAR,
        iconID=BIGINT,
    ),
    TableSchema.of("invMetaTypes", typeID=BIGINT, parentTypeID=BIGINT, metaGroupID=BIGINT),
    TableSchema.of("invTypeMaterials", typeID=BIGINT, materialTypeID=BIGINT, quantity=BIGINT),
    TableSchema.of(
        "invControlTowerResources",
        controlTowerTypeID=BIGINT,
        resourceTypeID=BIGINT,
        purpose=INTEGER,
        quantity=BIGINT,
        minSecurityLevel=DOUBLE,
        factionID=BIGINT,
    ),
    TableSchema.of("invControlTowerResourcePurposes", purpose=INTEGER, purposeText=VARCHAR),
    TableSchema.of(
        "invFlags",
        flagID=BIGINT,
        flagName=VARCHAR,
        flagText=VARCHAR,
        orderID=INTEGER,
    ),
    TableSchema.of(
        "invContrabandTypes",
        typeID=BIGINT,
        factionID=BIGINT,
        standingLoss=DOUBLE,
        confiscateMinSec=DOUBLE,
        fineByValue=DOUBLE,
        attackMinSec=DOUBLE,
    ),
    TableSchema.of(
        "invTypeReactions",
        reactionTypeID=BIGINT,
        input=BOOLEAN,
        typeID=BIGINT,
        quantity=BIGINT,
    ),
    TableSchema.of(
        "chrFactions",
        factionID=BIGINT,
        factionName=VARCHAR,
        description=VARCHAR,
        solarSystemID=BIGINT,
        corporationID=BIGINT,
        sizeFactor=DOUBLE,
        stationCount=INTEGER,
        stationSystemCount=INTEGER,
        militiaCorporationID=BIGINT,
        iconID=BIGINT,
    ),
    TableSchema.of(
        "mapDenormalize",
        key_column="itemID",
        itemID=BIGINT,
        typeID=BIGINT,
        groupID=BIGINT,
        solarSystemID=BIGINT,
        constellationID=BIGINT,
        regionID=BIGINT,
        itemName=VARCHAR,
        x=DOUBLE,
        y=DOUBLE,
        z=DOUBLE,
        radius=DOUBLE,
        security=DOUBLE,
    ),
    TableSchema.of(
        "staStations",
        stationID=BIGINT,
        security=DOUBLE,
        dockingCostPerVolume=DOUBLE,
        maxShipVolumeDockable=DOUBLE,
        officeRentalCost=DOUBLE,
        operationID=BIGINT,
        stationTypeID=BIGINT,
        corporationID=BIGINT,
        solarSystemID=BIGINT,
        constellationID=BIGINT,
        regionID=BIGINT,
        stationName=VARCHAR,
        x=DOUBLE,
        y=DOUBLE,
        z=DOUBLE,
        reprocessingEfficiency=DOUBLE,
        reprocessingStationsTake=DOUBLE,
        reprocessingHangarFlag=INTEGER,
    ),
    TableSchema.of(
        "dgmAttributeTypes",
        attributeID=BIGINT,
        attributeName=VARCHAR,
        description=VARCHAR,
        iconID=BIGINT,
        defaultValue=DOUBLE,
        published=BOOLEAN,
        displayName=VARCHAR,
        unitID=INTEGER,
        stackable=BOOLEAN,
        highIsGood=BOOLEAN,
        categoryID=INTEGER,
    ),
    TableSchema.of(
        "dgmEffects",
        effectID=BIGINT,
        effectName=VARCHAR,
        effectCategory=INTEGER,
        preExpression=BIGINT,
        postExpression=BIGINT,
        description=VARCHAR,
        guid=VARCHAR,
        iconID=BIGINT,
        isOffensive=BOOLEAN,
        isAssistance=BOOLEAN,
        durationAttributeID=BIGINT,
        trackingSpeedAttributeID=BIGINT,
        dischargeAttributeID=BIGINT,
        rangeAttributeID=BIGINT,
        falloffAttributeID=BIGINT,
        disallowAutoRepeat=BOOLEAN,
        published=BOOLEAN,
        displayName=VARCHAR,
        isWarpSafe=BOOLEAN,
        rangeChance=BOOLEAN,
        electronicChance=BOOLEAN,
        propulsionChance=BOOLEAN,
        distribution=INTEGER,
        sfxName=VARCHAR,
        npcUsageChanceAttributeID=BIGINT,
        npcActivationChanceAttributeID=BIGINT,
        fittingUsageChanceAttributeID=BIGINT,
        modifierInfo=VARCHAR,
    ),
    TableSchema.of(
        "dgmTypeAttributes",
        typeID=BIGINT,
        attributeID=BIGINT,
        valueInt=INTEGER,
        valueFloat=DOUBLE,
    ),
    TableSchema.of("dgmTypeEffects", typeID=BIGINT, effectID=BIGINT, isDefault=BOOLEAN),
    TableSchema.of(
        "ramActivities",
        activityID=BIGINT,
        activityName=VARCHAR,
        iconNo=VARCHAR,
        description=VARCHAR,
        published=BOOLEAN,
    ),
    TableSchema.of(
        "universe_schematics",
        schematic_id=BIGINT,
        cycle_time=INTEGER,
        schematic_name=VARCHAR,
        type_id=BIGINT,
    ),
)

TABLE_SCHEMAS: dict[str, TableSchema] = {schema.name: schema for schema in _SCHEMAS}


def get_table_schema(table: str) -> TableSchema | None:
    """Return the declared schema of a destination table, if any."""
    return TABLE_SCHEMAS.get(table)
