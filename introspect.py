#!/usr/bin/env python3
"""
Schema introspection wrapper.

This is a convenience wrapper that forwards to the introspect_tools module.

Usage:
    python introspect.py [--config PATH] [--output PATH]
    ./introspect.py  (on Unix with execute permission)

The output is written relative to the directory the wrapper is run from.
"""

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def main() -> int:
    """Forward all arguments to the introspect_tools module."""
    return subprocess.call(
        [sys.executable, "-m", "introspect_tools"] + sys.argv[1:],
        env={**os.environ, "PYTHONPATH": os.pathsep.join(
            p for p in (str(ROOT), os.environ.get("PYTHONPATH")) if p
        )},
    )


if __name__ == "__main__":
    sys.exit(main())
