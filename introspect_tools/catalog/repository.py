"""
Catalog repository - reads table and column metadata from information_schema.

The connection is passed in explicitly; ``connect`` is the scoped way to
obtain one so it is closed on every exit path.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Final, Iterator

import psycopg
from psycopg.rows import dict_row

from ..shared import DatabaseConnectionError, QueryError

TABLES_QUERY: Final[str] = """
    SELECT table_name
    FROM information_schema.tables
    WHERE table_schema = %s
      AND table_type = 'BASE TABLE'
    ORDER BY table_name
"""

# Joined to base tables so view columns are not reported.
COLUMNS_QUERY: Final[str] = """
    SELECT
        c.table_name,
        c.column_name,
        c.data_type,
        c.udt_name,
        c.is_nullable
    FROM information_schema.columns AS c
    JOIN information_schema.tables AS t
      ON t.table_schema = c.table_schema
     AND t.table_name = c.table_name
    WHERE c.table_schema = %s
      AND t.table_type = 'BASE TABLE'
    ORDER BY c.table_name, c.ordinal_position
"""


@dataclass(frozen=True, slots=True)
class TableDescriptor:
    """A base table in the introspected schema."""

    name: str


@dataclass(frozen=True, slots=True)
class ColumnDescriptor:
    """A column of a base table, as reported by the catalog."""

    table_name: str
    column_name: str
    declared_type: str
    storage_type: str
    nullable: bool

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ColumnDescriptor:
        """Build a descriptor from an information_schema.columns row."""
        return cls(
            table_name=str(row["table_name"]),
            column_name=str(row["column_name"]),
            declared_type=str(row["data_type"]),
            storage_type=str(row["udt_name"]),
            nullable=row["is_nullable"] == "YES",
        )


@contextmanager
def connect(conninfo: str) -> Iterator[psycopg.Connection]:
    """Open a read-only session and close it when the block exits.

    Raises:
        DatabaseConnectionError: If the connection cannot be established.
    """
    try:
        conn = psycopg.connect(conninfo, row_factory=dict_row)
    except psycopg.Error as e:
        raise DatabaseConnectionError(f"Failed to connect to database: {e}") from e

    try:
        yield conn
    finally:
        conn.close()


class CatalogRepository:
    """Read-only access to the schema catalog of a single schema."""

    def __init__(self, conn: psycopg.Connection, schema: str = "public") -> None:
        self.conn = conn
        self.schema = schema

    def _fetch_all(self, query_name: str, query: str) -> list[dict[str, Any]]:
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, (self.schema,))
                return cur.fetchall()
        except psycopg.Error as e:
            raise QueryError(f"Catalog query failed: {e}", query_name) from e

    def fetch_tables(self) -> list[TableDescriptor]:
        """Return base tables of the schema, ordered by name."""
        rows = self._fetch_all("tables", TABLES_QUERY)
        return [TableDescriptor(name=str(row["table_name"])) for row in rows]

    def fetch_columns(self) -> list[ColumnDescriptor]:
        """Return every base-table column, ordered by table then ordinal position."""
        rows = self._fetch_all("columns", COLUMNS_QUERY)
        return [ColumnDescriptor.from_row(row) for row in rows]
