"""Schema-driven record mapping engine.

This module dispatches each decoded source record to the rule
registered for its source file and tags the resulting rows with their
destination table. Mapping is pure: no I/O and no record mutation.

Dispatch order:
1. Virtual ``base:suffix`` identifiers use the nested sub-rule
   registered for ``(base member, suffix)``.
2. Other identifiers use the rule registered under the exact name.
3. Anything else uses the default passthrough rule.
"""

from __future__ import annotations

from pathlib import Path

from core.types import DestinationRow, MappedRow, SourceRecord
from mapping.dogma_rules import DOGMA_RULES
from mapping.field_values import scalar_value
from mapping.inventory_rules import INVENTORY_RULES
from mapping.rule_types import MappingRule
from mapping.source_files import TABLE_MAPPINGS, split_source_id
from mapping.universe_rules import UNIVERSE_RULES

DEFAULT_KEY_COLUMN = "id"

_ALL_RULES: tuple[MappingRule, ...] = (*INVENTORY_RULES, *DOGMA_RULES, *UNIVERSE_RULES)
_RULES_BY_ROUTE: dict[tuple[str, str | None], MappingRule] = {
    rule.routing_key: rule for rule in _ALL_RULES
}


def map_record(source_id: str, record: SourceRecord) -> list[MappedRow]:
    """Map one source record into destination rows.

    Args:
        source_id: Source-file identifier, e.g. ``types.jsonl`` or
            ``typeDogma:effects.jsonl``.
        record: Decoded JSON object. It is never mutated.

    Returns:
        Zero or more rows tagged with their destination table.
    """
    rule = resolve_rule(source_id)
    return [MappedRow(table=rule.table, row=row) for row in rule.apply(record)]


def resolve_rule(source_id: str) -> MappingRule:
    """Return the rule that maps records of a source file.

    Args:
        source_id: Source-file identifier.

    Returns:
        Registered rule, or the default passthrough rule.
    """
    rule = _RULES_BY_ROUTE.get(split_source_id(source_id))
    if rule is not None:
        return rule
    return MappingRule(
        source_id=source_id,
        table=TABLE_MAPPINGS.get(source_id) or _derived_table_name(source_id),
        transform=map_passthrough,
    )


def registered_rules() -> tuple[MappingRule, ...]:
    """Return every registered rule in registration order."""
    return _ALL_RULES


def map_passthrough(record: SourceRecord) -> DestinationRow:
    """Copy a record, renaming ``_key`` to ``id`` and resolving text fields.

    Records whose multilingual fields carry no recognized language keep
    a null value rather than being dropped.
    """
    row: DestinationRow = {}
    for field_name, value in record.items():
        if field_name == "_key":
            row[DEFAULT_KEY_COLUMN] = scalar_value(value)
        else:
            row[field_name] = scalar_value(value)
    return row


def _derived_table_name(source_id: str) -> str:
    base, suffix = split_source_id(source_id)
    stem = Path(base).stem
    return f"{stem}_{suffix}" if suffix else stem
