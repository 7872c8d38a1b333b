"""Naming utilities for code generation."""

from __future__ import annotations

import json
import re
from functools import lru_cache
from typing import Final

_IDENTIFIER_RE: Final = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a snake_case table name to PascalCase.

    Only the first character of each segment is changed; the rest of the
    segment keeps its original case.

    Examples:
        >>> to_pascal_case("user_accounts")
        'UserAccounts'
        >>> to_pascal_case("api_keyStore")
        'ApiKeyStore'
    """
    return "".join(segment[:1].upper() + segment[1:] for segment in value.split("_"))


@lru_cache(maxsize=1024)
def is_identifier(value: str) -> bool:
    """Return True if value is a valid TypeScript identifier."""
    return bool(_IDENTIFIER_RE.match(value))


@lru_cache(maxsize=1024)
def property_key(value: str) -> str:
    """Render a column name as an interface property key.

    Names that are not plain identifiers are emitted as double-quoted
    string keys.
    """
    if is_identifier(value):
        return value
    return json.dumps(value)
