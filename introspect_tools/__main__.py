#!/usr/bin/env python3
"""
Schema introspection CLI.

Usage:
    python -m introspect_tools [--config PATH] [--output PATH]

Reads DATABASE_URL, introspects the public schema and writes schema.d.ts
to the current directory.
"""

from __future__ import annotations

import sys

from introspect_tools.ts_codegen.main import main as codegen_main


def main(argv: list[str] | None = None) -> int:
    try:
        codegen_main(argv)
        return 0
    except SystemExit as e:
        if isinstance(e.code, int):
            return e.code
        if e.code:
            print(e.code, file=sys.stderr)
            return 1
        return 0


if __name__ == "__main__":
    sys.exit(main())
