"""In-memory storage sink.

This module keeps destination tables as lists of dict rows and
records every primitive it receives, which makes load ordering
observable in tests and dry runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from core.errors import SinkWriteError
from core.types import DestinationRow


@dataclass(frozen=True)
class SinkOperation:
    """One primitive received by the sink."""

    action: str
    table: str
    row_count: int = 0


@dataclass
class InMemorySink:
    """Storage sink holding tables in process memory."""

    tables: dict[str, list[DestinationRow]] = field(default_factory=dict)
    operations: list[SinkOperation] = field(default_factory=list)

    def truncate(self, table: str) -> None:
        self.tables[table] = []
        self.operations.append(SinkOperation(action="truncate", table=table))

    def insert_batch(self, table: str, rows: Sequence[DestinationRow]) -> None:
        self.tables.setdefault(table, []).extend(dict(row) for row in rows)
        self.operations.append(SinkOperation(action="insert", table=table, row_count=len(rows)))

    def upsert_batch(
        self,
        table: str,
        rows: Sequence[DestinationRow],
        key_column: str,
    ) -> None:
        """Insert rows or merge their columns into rows with the same key.

        Raises:
            SinkWriteError: If a row lacks the key column. The table is
                left unchanged.
        """
        if any(row.get(key_column) is None for row in rows):
            raise SinkWriteError(
                f"Cannot upsert into {table}: row is missing key column '{key_column}'."
            )
        table_rows = self.tables.setdefault(table, [])
        index = {row.get(key_column): row for row in table_rows}
        for row in rows:
            existing = index.get(row[key_column])
            if existing is None:
                stored = dict(row)
                table_rows.append(stored)
                index[row[key_column]] = stored
            else:
                existing.update(row)
        self.operations.append(SinkOperation(action="upsert", table=table, row_count=len(rows)))

    def rows(self, table: str) -> list[DestinationRow]:
        """Return the stored rows of a table."""
        return list(self.tables.get(table, []))

    def count(self, action: str, table: str) -> int:
        """Return how many times a primitive was applied to a table."""
        return sum(
            1 for operation in self.operations
            if operation.action == action and operation.table == table
        )
