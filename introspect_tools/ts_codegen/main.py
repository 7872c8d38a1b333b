"""
TypeScript Code Generator - Generates table row interfaces from a live PostgreSQL schema.

Pipeline:
- Fetch base tables and columns from information_schema
- Map each column type to a TypeScript type
- Build one interface per table plus the aggregate Database interface
- Render, format and write the declaration file
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path

from ..catalog import CatalogRepository, connect
from ..shared import IntrospectError, Settings, load_settings
from .declarations import build_declarations
from .emitter import emit
from .type_mapper import TypeMapper


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """Summary of a completed run."""

    output_path: Path
    table_count: int
    content: str
    warnings: tuple[str, ...] = field(default_factory=tuple)


def generate(settings: Settings, generated_at: str | None = None) -> GenerationResult:
    """Run the full introspection pipeline.

    Args:
        settings: Resolved settings for this run.
        generated_at: Header timestamp override; defaults to now.

    Returns:
        Summary of the generated file.

    Raises:
        IntrospectError: On any connection, query, naming or emit failure.
    """
    with connect(settings.database_url) as conn:
        repo = CatalogRepository(conn, schema=settings.schema)
        tables = repo.fetch_tables()
        columns = repo.fetch_columns()

    print("[introspect] fetched tables:", [table.name for table in tables])

    mapper = TypeMapper(overrides=settings.type_overrides)
    declarations, database = build_declarations(tables, columns, mapper)

    content = emit(
        declarations,
        database,
        settings.output,
        formatter=settings.formatter,
        tab_width=settings.tab_width,
        generated_at=generated_at,
    )

    return GenerationResult(
        output_path=settings.output,
        table_count=len(declarations),
        content=content,
        warnings=tuple(mapper.warnings),
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate TypeScript row interfaces from the database schema",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML config file (default: ./introspect.yaml if present)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file (default: schema.d.ts)",
    )

    args = parser.parse_args(argv)

    try:
        settings = load_settings(config_path=args.config, output=args.output)
        result = generate(settings)
    except IntrospectError as e:
        raise SystemExit(f"Error: {e}") from e

    if result.warnings:
        print(f"[introspect] {len(result.warnings)} column(s) mapped to unknown")
    print(
        f"[introspect] successfully updated schema in {result.output_path} "
        f"({result.table_count} table(s))"
    )


if __name__ == "__main__":
    main()
