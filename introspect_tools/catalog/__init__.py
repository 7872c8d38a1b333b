"""Catalog access - fetches table and column metadata from PostgreSQL."""

from .repository import (
    CatalogRepository,
    ColumnDescriptor,
    TableDescriptor,
    connect,
    TABLES_QUERY,
    COLUMNS_QUERY,
)

__all__ = [
    "CatalogRepository",
    "ColumnDescriptor",
    "TableDescriptor",
    "connect",
    "TABLES_QUERY",
    "COLUMNS_QUERY",
]
