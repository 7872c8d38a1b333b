"""TypeScript Code Generator - Generates row interfaces from a PostgreSQL schema."""

from .declarations import (
    DatabaseDeclaration,
    Field,
    TableDeclaration,
    build_declarations,
    group_columns,
)
from .emitter import emit, render_declarations, write_output
from .formatter import format_source
from .main import GenerationResult, generate, main
from .type_mapper import (
    DECLARED_TYPE_NODES,
    STORAGE_TYPE_NODES,
    KeywordType,
    TypeMapper,
    TypeReference,
    UnionType,
)

__all__ = [
    "DatabaseDeclaration",
    "Field",
    "TableDeclaration",
    "build_declarations",
    "group_columns",
    "emit",
    "render_declarations",
    "write_output",
    "format_source",
    "GenerationResult",
    "generate",
    "main",
    "DECLARED_TYPE_NODES",
    "STORAGE_TYPE_NODES",
    "KeywordType",
    "TypeMapper",
    "TypeReference",
    "UnionType",
]
