"""DuckDB-backed storage sink.

This module creates destination tables from their declared schemas
and applies truncate, insert, and key-based upsert statements. Each
batch is written in one transaction. Upserts only overwrite the
columns a row supplies, so several source files can fill different
columns of one merged row.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Mapping, Sequence

import duckdb

from core.errors import SinkWriteError
from core.logging_config import get_logger
from core.types import DestinationRow
from mapping.table_schemas import BIGINT, BOOLEAN, DOUBLE, TABLE_SCHEMAS, VARCHAR, TableSchema

_LOGGER = get_logger(__name__)


class DuckDbSink:
    """Storage sink writing into a DuckDB database."""

    def __init__(
        self,
        connection: duckdb.DuckDBPyConnection,
        schemas: Mapping[str, TableSchema] = TABLE_SCHEMAS,
    ) -> None:
        self._connection = connection
        self._schemas = schemas
        self._known_tables: set[str] = set()

    @classmethod
    def connect(cls, database_path: Path) -> "DuckDbSink":
        """Open or create a DuckDB database file.

        Args:
            database_path: Database file path; parent directories are created.

        Returns:
            Sink bound to the database.

        Raises:
            SinkWriteError: If the database cannot be opened.
        """
        database_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            connection = duckdb.connect(str(database_path))
        except duckdb.Error as error:
            raise SinkWriteError(
                f"Failed to open DuckDB database at {database_path}: {error}. "
                "Check SDE_DATABASE_PATH and file permissions."
            ) from error
        return cls(connection)

    def __enter__(self) -> "DuckDbSink":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._connection.close()

    def truncate(self, table: str) -> None:
        self._ensure_table(table, sample_row=None, key_column=None)
        if table not in self._known_tables:
            return
        self._execute(table, f"DELETE FROM {_quote(table)}")

    def insert_batch(self, table: str, rows: Sequence[DestinationRow]) -> None:
        if not rows:
            return
        self._ensure_table(table, sample_row=rows[0], key_column=None)
        statements = [
            (
                f"INSERT INTO {_quote(table)} ({_column_list(columns)}) "
                f"VALUES ({_placeholders(columns)})",
                group,
            )
            for columns, group in _group_by_columns(rows)
        ]
        self._write_batch(table, statements)

    def upsert_batch(
        self,
        table: str,
        rows: Sequence[DestinationRow],
        key_column: str,
    ) -> None:
        if not rows:
            return
        self._ensure_table(table, sample_row=rows[0], key_column=key_column)
        statements: list[tuple[str, list[tuple[Any, ...]]]] = []
        for columns, group in _group_by_columns(rows):
            if key_column not in columns:
                raise SinkWriteError(
                    f"Cannot upsert into {table}: rows are missing key column '{key_column}'."
                )
            statements.append((_upsert_statement(table, columns, key_column), group))
        self._write_batch(table, statements)

    def fetch_rows(self, table: str) -> list[dict[str, Any]]:
        """Return every row of a table as column-to-value dicts."""
        cursor = self._execute(table, f"SELECT * FROM {_quote(table)}")
        column_names = [description[0] for description in cursor.description]
        return [dict(zip(column_names, values)) for values in cursor.fetchall()]

    def _ensure_table(
        self,
        table: str,
        sample_row: DestinationRow | None,
        key_column: str | None,
    ) -> None:
        if table in self._known_tables:
            return
        schema = self._schemas.get(table)
        if schema is None and sample_row is not None:
            schema = _infer_schema(table, sample_row, key_column)
        if schema is None:
            if self._table_exists(table):
                self._known_tables.add(table)
            return
        self._execute(table, _create_statement(schema))
        self._known_tables.add(table)
        _LOGGER.debug("table_ensured", table=table, columns=len(schema.columns))

    def _table_exists(self, table: str) -> bool:
        cursor = self._execute(
            table,
            "SELECT count(*) FROM information_schema.tables WHERE table_name = ?",
            [table],
        )
        row = cursor.fetchone()
        return bool(row and row[0])

    def _execute(
        self,
        table: str,
        statement: str,
        parameters: Sequence[Any] | None = None,
    ) -> duckdb.DuckDBPyConnection:
        try:
            if parameters is None:
                return self._connection.execute(statement)
            return self._connection.execute(statement, parameters)
        except duckdb.Error as error:
            raise SinkWriteError(f"Failed to write table {table}: {error}.") from error

    def _write_batch(
        self,
        table: str,
        statements: list[tuple[str, list[tuple[Any, ...]]]],
    ) -> None:
        """Apply one batch inside a transaction; a failure leaves the table unchanged."""
        row_count = sum(len(values) for _, values in statements)
        self._execute(table, "BEGIN TRANSACTION")
        try:
            for statement, values in statements:
                self._connection.executemany(statement, values)
            self._connection.commit()
        except duckdb.Error as error:
            self._connection.rollback()
            raise SinkWriteError(
                f"Failed to write {row_count} rows into {table}: {error}. "
                "No rows from this batch were stored."
            ) from error


def _group_by_columns(
    rows: Sequence[DestinationRow],
) -> Iterator[tuple[tuple[str, ...], list[tuple[Any, ...]]]]:
    """Group consecutive rows sharing a column layout, preserving order."""
    current_columns: tuple[str, ...] | None = None
    current_values: list[tuple[Any, ...]] = []
    for row in rows:
        columns = tuple(row)
        if columns != current_columns and current_values:
            yield current_columns or (), current_values
            current_values = []
        current_columns = columns
        current_values.append(tuple(row.values()))
    if current_values:
        yield current_columns or (), current_values


def _upsert_statement(table: str, columns: tuple[str, ...], key_column: str) -> str:
    insert = (
        f"INSERT INTO {_quote(table)} ({_column_list(columns)}) "
        f"VALUES ({_placeholders(columns)}) ON CONFLICT ({_quote(key_column)}) "
    )
    updates = [
        f"{_quote(column)} = excluded.{_quote(column)}"
        for column in columns
        if column != key_column
    ]
    if not updates:
        return insert + "DO NOTHING"
    return insert + "DO UPDATE SET " + ", ".join(updates)


def _create_statement(schema: TableSchema) -> str:
    column_defs = [
        f"{_quote(column)} {sql_type}"
        + (" PRIMARY KEY" if column == schema.key_column else "")
        for column, sql_type in schema.columns
    ]
    return f"CREATE TABLE IF NOT EXISTS {_quote(schema.name)} ({', '.join(column_defs)})"


def _infer_schema(
    table: str,
    sample_row: DestinationRow,
    key_column: str | None,
) -> TableSchema:
    columns = tuple((column, _sql_type(value)) for column, value in sample_row.items())
    return TableSchema(name=table, columns=columns, key_column=key_column)


def _sql_type(value: Any) -> str:
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, int):
        return BIGINT
    if isinstance(value, float):
        return DOUBLE
    return VARCHAR


def _quote(identifier: str) -> str:
    return '"' + identifier.replace('"', '""') + '"'


def _column_list(columns: tuple[str, ...]) -> str:
    return ", ".join(_quote(column) for column in columns)


def _placeholders(columns: tuple[str, ...]) -> str:
    return ", ".join("?" for _ in columns)
