"""Mapping rule model.

This module defines the rules held by the mapping registry. Every rule
names its destination table and a pure transform. Rules that list
nested array fields apply their transform once per array element.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, Optional

from core.types import DestinationRow, SourceRecord
from mapping.field_values import nested_items
from mapping.source_files import TABLE_MAPPINGS, split_source_id

RuleKind = Literal["flat", "explode", "nested"]
SingleRowTransform = Callable[[SourceRecord], Optional[DestinationRow]]
ItemTransform = Callable[[SourceRecord, str, Mapping[str, Any]], DestinationRow]


@dataclass(frozen=True)
class MappingRule:
    """One source-file mapping rule.

    Attributes:
        source_id: Source-file identifier the rule is registered under.
        table: Destination table name.
        transform: Record transform for rules without nested fields,
            otherwise a ``(record, field_name, item)`` element transform.
        nested_fields: Array fields exploded into one row per element.
    """

    source_id: str
    table: str
    transform: Callable[..., Any]
    nested_fields: tuple[str, ...] = ()

    @property
    def routing_key(self) -> tuple[str, str | None]:
        """Return ``(physical member, virtual suffix)`` for registry lookup."""
        return split_source_id(self.source_id)

    @property
    def kind(self) -> RuleKind:
        """Return ``nested`` for virtual identifiers, else ``explode`` or ``flat``."""
        if self.routing_key[1] is not None:
            return "nested"
        return "explode" if self.nested_fields else "flat"

    def apply(self, record: SourceRecord) -> list[DestinationRow]:
        """Map one record into zero or more destination rows."""
        if not self.nested_fields:
            row = self.transform(record)
            return [] if row is None else [row]
        return [
            self.transform(record, field_name, item)
            for field_name in self.nested_fields
            for item in nested_items(record, field_name)
        ]


def flat_rule(source_id: str, transform: SingleRowTransform) -> MappingRule:
    """Build a rule emitting at most one row per record."""
    return MappingRule(source_id=source_id, table=TABLE_MAPPINGS[source_id], transform=transform)


def explode_rule(
    source_id: str,
    nested_fields: tuple[str, ...],
    transform: ItemTransform,
) -> MappingRule:
    """Build a rule emitting one row per element of the nested arrays, in field order."""
    return MappingRule(
        source_id=source_id,
        table=TABLE_MAPPINGS[source_id],
        transform=transform,
        nested_fields=nested_fields,
    )
