"""
Source formatting for generated declarations.

Two formatters are available: ``builtin`` normalizes whitespace in-process,
``prettier`` pipes the text through the prettier CLI.
"""

from __future__ import annotations

import re
import shutil
import subprocess
import sys
from typing import Final

from ..shared import EmitError

_BLANK_RUN_RE: Final = re.compile(r"\n{3,}")
_LEADING_TABS_RE: Final = re.compile(r"^\t+", re.MULTILINE)


def format_builtin(source: str, tab_width: int = 2) -> str:
    """Normalize generated source to the canonical layout.

    LF newlines, leading tabs expanded to ``tab_width`` spaces, no trailing
    whitespace, at most one blank line in a row and exactly one final
    newline.
    """
    text = source.replace("\r\n", "\n").replace("\r", "\n")
    text = _LEADING_TABS_RE.sub(lambda m: " " * (tab_width * len(m.group(0))), text)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.strip("\n") + "\n"


def prettier_command(tab_width: int = 2) -> list[str]:
    """Build the prettier invocation for TypeScript declarations."""
    return [
        "prettier",
        "--parser",
        "typescript",
        "--tab-width",
        str(tab_width),
        "--no-single-quote",
        "--trailing-comma",
        "es5",
    ]


def format_prettier(source: str, tab_width: int = 2) -> str:
    """Format source with the prettier CLI.

    Raises:
        EmitError: If prettier is not installed or rejects the input.
    """
    command = prettier_command(tab_width)
    # On Windows, resolve the executable path to handle .cmd files
    resolved = shutil.which(command[0])
    if resolved is None:
        raise EmitError("prettier executable not found on PATH")
    if sys.platform == "win32":
        command[0] = resolved

    try:
        result = subprocess.run(
            command,
            input=source,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        raise EmitError(f"prettier failed: {e.stderr.strip() or e}") from e
    except OSError as e:
        raise EmitError(f"Failed to run prettier: {e}") from e

    return result.stdout


def format_source(source: str, formatter: str = "builtin", tab_width: int = 2) -> str:
    """Format generated source with the configured formatter."""
    if formatter == "prettier":
        return format_prettier(source, tab_width)
    if formatter == "builtin":
        return format_builtin(source, tab_width)
    raise EmitError(f"Unknown formatter '{formatter}'")
