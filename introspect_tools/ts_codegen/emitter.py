"""Renders declarations to TypeScript and writes the output file."""

from __future__ import annotations

import os
import stat
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Final, Sequence

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError,
)

from ..shared import EmitError, is_identifier, property_key
from .declarations import DatabaseDeclaration, TableDeclaration
from .formatter import format_source

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"
SCHEMA_TEMPLATE: Final[str] = "schema.d.ts.j2"


@dataclass
class RenderContext:
    """Template environment for the declaration file."""

    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )
        self.template_env.filters["property_key"] = property_key
        self._schema_template = self.template_env.get_template(SCHEMA_TEMPLATE)

    @property
    def schema_template(self) -> Template:
        return self._schema_template


def timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. ``2024-01-02T03:04:05.678Z``."""
    now = now if now is not None else datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def render_declarations(
    declarations: Sequence[TableDeclaration],
    database: DatabaseDeclaration,
    generated_at: str | None = None,
    ctx: RenderContext | None = None,
) -> str:
    """Render declarations, with the generated-file header, to unformatted source.

    Raises:
        EmitError: If an interface name is not a valid identifier.
    """
    for decl in declarations:
        if not is_identifier(decl.interface_name):
            raise EmitError(
                f"Table '{decl.table_name}' produces invalid interface name "
                f"'{decl.interface_name}'"
            )

    ctx = ctx if ctx is not None else RenderContext()
    try:
        return ctx.schema_template.render(
            generated_at=generated_at if generated_at is not None else timestamp(),
            declarations=declarations,
            database=database,
        )
    except TemplateError as e:
        raise EmitError(f"Failed to render declarations: {e}") from e


def _output_mode(output_path: Path) -> int:
    """Mode for the written file: the existing file's, else 0o666 less the umask."""
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_output(content: str, output_path: Path) -> None:
    """Atomically replace output_path with content.

    The text goes to a temporary file next to the target first, so a failed
    write leaves any previous file untouched.

    Raises:
        EmitError: If the file cannot be written.
    """
    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            newline="\n",
            dir=output_path.parent,
            prefix=f".{output_path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.chmod(tmp_name, _output_mode(output_path))
        os.replace(tmp_name, output_path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise EmitError(f"Failed to write output: {e}", str(output_path)) from e


def emit(
    declarations: Sequence[TableDeclaration],
    database: DatabaseDeclaration,
    output_path: Path,
    formatter: str = "builtin",
    tab_width: int = 2,
    generated_at: str | None = None,
) -> str:
    """Render, format and write the declaration file. Returns the written text."""
    source = render_declarations(declarations, database, generated_at)
    formatted = format_source(source, formatter, tab_width)
    write_output(formatted, output_path)
    return formatted
