"""
Type mapping from PostgreSQL column types to TypeScript type nodes.

Resolution is table driven and consulted in priority order:
configured overrides, then storage (udt) type, then declared data type.
Anything unmatched becomes ``unknown`` with a warning, so mapping never
fails.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Final, Mapping, Union


@dataclass(frozen=True, slots=True)
class KeywordType:
    """A TypeScript keyword type such as ``string`` or ``null``."""

    keyword: str

    def render(self) -> str:
        return self.keyword


@dataclass(frozen=True, slots=True)
class TypeReference:
    """A reference to a named declaration."""

    name: str

    def render(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class UnionType:
    """A union of two or more type nodes."""

    members: tuple[TypeNode, ...]

    def render(self) -> str:
        return " | ".join(member.render() for member in self.members)


TypeNode = Union[KeywordType, TypeReference, UnionType]

STRING: Final = KeywordType("string")
NUMBER: Final = KeywordType("number")
BOOLEAN: Final = KeywordType("boolean")
UNKNOWN: Final = KeywordType("unknown")
NULL: Final = KeywordType("null")

KEYWORD_TYPES: Final[dict[str, KeywordType]] = {
    "string": STRING,
    "number": NUMBER,
    "boolean": BOOLEAN,
    "unknown": UNKNOWN,
}

# Matched on udt_name before the declared type is looked at
STORAGE_TYPE_NODES: Final[dict[str, KeywordType]] = {
    "uuid": STRING,
    "timestamptz": STRING,
    "timestamp": STRING,
    "citext": STRING,
}

DECLARED_TYPE_NODES: Final[dict[str, KeywordType]] = {
    "character varying": STRING,
    "text": STRING,
    "character": STRING,
    # may exceed Number.MAX_SAFE_INTEGER
    "bigint": STRING,
    "integer": NUMBER,
    "smallint": NUMBER,
    "numeric": NUMBER,
    "decimal": NUMBER,
    "real": NUMBER,
    "double precision": NUMBER,
    "boolean": BOOLEAN,
    # TODO: revisit once a date representation (string vs Date) is agreed on
    "date": STRING,
    "json": UNKNOWN,
    "jsonb": UNKNOWN,
    "uuid": STRING,
}


def with_null(node: TypeNode) -> UnionType:
    """Widen a type node to ``node | null``."""
    return UnionType((node, NULL))


def strip_null(node: TypeNode) -> TypeNode:
    """Remove the ``null`` member from a union, if present."""
    if not isinstance(node, UnionType):
        return node
    members = tuple(member for member in node.members if member != NULL)
    if len(members) == 1:
        return members[0]
    return UnionType(members)


@dataclass
class TypeMapper:
    """Maps column types to type nodes and collects unknown-type warnings."""

    overrides: Mapping[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    def base_type(
        self,
        declared_type: str,
        storage_type: str,
        context: str | None = None,
    ) -> KeywordType:
        """Resolve the non-nullable type node for a column."""
        override = self.overrides.get(storage_type)
        if override is not None:
            return KEYWORD_TYPES[override]

        node = STORAGE_TYPE_NODES.get(storage_type)
        if node is not None:
            return node

        node = DECLARED_TYPE_NODES.get(declared_type)
        if node is not None:
            return node

        self._warn(declared_type, storage_type, context)
        return UNKNOWN

    def map(
        self,
        declared_type: str,
        storage_type: str,
        nullable: bool,
        context: str | None = None,
    ) -> TypeNode:
        """Map a column type, widening nullable columns with ``null``."""
        node = self.base_type(declared_type, storage_type, context)
        if nullable:
            return with_null(node)
        return node

    def _warn(self, declared_type: str, storage_type: str, context: str | None) -> None:
        message = f"unknown type: {declared_type} ({storage_type})"
        if context:
            message = f"{message} for {context}"
        self.warnings.append(message)
        print(f"[introspect] warning: {message}", file=sys.stderr)
