"""Dogma attribute and effect mapping rules.

Per-type attribute values are stored in an integer column when they
are integral and fit a signed 32-bit range, and in a float column
otherwise.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from core.types import DestinationRow, SourceRecord
from mapping.field_values import select_text, split_numeric, value_or
from mapping.rule_types import MappingRule, explode_rule, flat_rule


def map_dogma_attribute(record: SourceRecord) -> DestinationRow:
    return {
        "attributeID": record.get("_key"),
        "attributeName": select_text(record.get("name")),
        "description": select_text(record.get("description")),
        "iconID": record.get("iconID"),
        "defaultValue": record.get("defaultValue"),
        "published": value_or(record, "published", False),
        "displayName": select_text(record.get("displayName")),
        "unitID": record.get("unitID"),
        "stackable": value_or(record, "stackable", False),
        "highIsGood": value_or(record, "highIsGood", False),
        "categoryID": record.get("categoryID"),
    }


def map_dogma_effect(record: SourceRecord) -> DestinationRow:
    return {
        "effectID": record.get("_key"),
        "effectName": select_text(record.get("name")),
        "effectCategory": record.get("category"),
        "preExpression": record.get("preExpression"),
        "postExpression": record.get("postExpression"),
        "description": select_text(record.get("description")),
        "guid": record.get("guid"),
        "iconID": record.get("iconID"),
        "isOffensive": value_or(record, "isOffensive", False),
        "isAssistance": value_or(record, "isAssistance", False),
        "durationAttributeID": record.get("durationAttributeID"),
        "trackingSpeedAttributeID": record.get("trackingSpeedAttributeID"),
        "dischargeAttributeID": record.get("dischargeAttributeID"),
        "rangeAttributeID": record.get("rangeAttributeID"),
        "falloffAttributeID": record.get("falloffAttributeID"),
        "disallowAutoRepeat": value_or(record, "disallowAutoRepeat", False),
        "published": value_or(record, "published", False),
        "displayName": select_text(record.get("displayName")),
        "isWarpSafe": value_or(record, "isWarpSafe", False),
        "rangeChance": value_or(record, "rangeChance", False),
        "electronicChance": value_or(record, "electronicChance", False),
        "propulsionChance": value_or(record, "propulsionChance", False),
        "distribution": record.get("distribution"),
        "sfxName": record.get("sfxName"),
        "npcUsageChanceAttributeID": record.get("npcUsageChanceAttributeID"),
        "npcActivationChanceAttributeID": record.get("npcActivationChanceAttributeID"),
        "fittingUsageChanceAttributeID": record.get("fittingUsageChanceAttributeID"),
        "modifierInfo": json.dumps(record.get("modifierInfo")),
    }


def map_type_attribute(
    record: SourceRecord, _field_name: str, attribute: Mapping[str, Any]
) -> DestinationRow:
    value_int, value_float = split_numeric(attribute.get("value"))
    return {
        "typeID": record.get("_key"),
        "attributeID": attribute.get("attributeID"),
        "valueInt": value_int,
        "valueFloat": value_float,
    }


def map_type_effect(
    record: SourceRecord, _field_name: str, effect: Mapping[str, Any]
) -> DestinationRow:
    return {
        "typeID": record.get("_key"),
        "effectID": effect.get("effectID"),
        "isDefault": value_or(effect, "isDefault", False),
    }


DOGMA_RULES: tuple[MappingRule, ...] = (
    flat_rule("dogmaAttributes.jsonl", map_dogma_attribute),
    flat_rule("dogmaEffects.jsonl", map_dogma_effect),
    explode_rule("typeDogma.jsonl", ("dogmaAttributes",), map_type_attribute),
    explode_rule("typeDogma:effects.jsonl", ("dogmaEffects",), map_type_effect),
)
