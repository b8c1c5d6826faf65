"""Storage sink contract consumed by the import orchestrator.

The pipeline issues these primitives in a fixed order and relies on
each one being atomic. It does not manage transactions itself.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from core.types import DestinationRow


class StorageSink(Protocol):
    """Relational destination accepting truncate, insert, and upsert."""

    def truncate(self, table: str) -> None:
        """Remove every row of a table."""

    def insert_batch(self, table: str, rows: Sequence[DestinationRow]) -> None:
        """Append rows to a table."""

    def upsert_batch(
        self,
        table: str,
        rows: Sequence[DestinationRow],
        key_column: str,
    ) -> None:
        """Insert rows, or update supplied columns of rows sharing a key."""
