"""Builds per-table interface declarations and the aggregate Database declaration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Sequence

from ..catalog import ColumnDescriptor, TableDescriptor
from ..shared import NamingCollisionError, to_pascal_case
from .type_mapper import TypeMapper, TypeNode, TypeReference

DATABASE_INTERFACE: Final[str] = "Database"


@dataclass(frozen=True, slots=True)
class Field:
    """A single interface property."""

    name: str
    type: TypeNode


@dataclass(frozen=True, slots=True)
class TableDeclaration:
    """An interface describing the row type of one table."""

    interface_name: str
    table_name: str
    fields: tuple[Field, ...]


@dataclass(frozen=True, slots=True)
class DatabaseDeclaration:
    """The aggregate interface mapping table names to row interfaces."""

    fields: tuple[Field, ...]
    interface_name: str = DATABASE_INTERFACE


def group_columns(
    columns: Sequence[ColumnDescriptor],
) -> dict[str, list[ColumnDescriptor]]:
    """Group columns by table, keeping catalog order within each table.

    Relies on dict insertion order; each list is appended in input order.
    """
    grouped: dict[str, list[ColumnDescriptor]] = {}
    for column in columns:
        grouped.setdefault(column.table_name, []).append(column)
    return grouped


def _check_collisions(tables: Sequence[TableDescriptor]) -> None:
    owners: dict[str, list[str]] = {DATABASE_INTERFACE: ["<Database aggregate>"]}
    for table in tables:
        owners.setdefault(to_pascal_case(table.name), []).append(table.name)

    for interface_name, names in owners.items():
        if len(names) > 1:
            raise NamingCollisionError(interface_name, names)


def build_table_declaration(
    table: TableDescriptor,
    columns: Sequence[ColumnDescriptor],
    mapper: TypeMapper,
) -> TableDeclaration:
    """Build the interface declaration for a single table."""
    fields = tuple(
        Field(
            name=col.column_name,
            type=mapper.map(
                col.declared_type,
                col.storage_type,
                col.nullable,
                context=f"{table.name}.{col.column_name}",
            ),
        )
        for col in columns
    )
    return TableDeclaration(
        interface_name=to_pascal_case(table.name),
        table_name=table.name,
        fields=fields,
    )


def build_declarations(
    tables: Sequence[TableDescriptor],
    columns: Sequence[ColumnDescriptor],
    mapper: TypeMapper | None = None,
) -> tuple[list[TableDeclaration], DatabaseDeclaration]:
    """Build all table declarations followed by the Database declaration.

    Declarations follow the order of ``tables``; columns belonging to
    tables that are not listed are ignored.

    Raises:
        NamingCollisionError: If two tables map to the same interface name.
    """
    mapper = mapper if mapper is not None else TypeMapper()
    _check_collisions(tables)

    grouped = group_columns(columns)
    declarations = [
        build_table_declaration(table, grouped.get(table.name, []), mapper)
        for table in tables
    ]

    database = DatabaseDeclaration(
        fields=tuple(
            Field(name=decl.table_name, type=TypeReference(decl.interface_name))
            for decl in declarations
        )
    )

    return declarations, database
