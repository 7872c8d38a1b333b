"""Custom exceptions for the introspection pipeline."""

from __future__ import annotations

from typing import Sequence


class IntrospectError(Exception):
    """Base exception for fatal introspection errors."""

    def __init__(self, message: str, context: str | None = None) -> None:
        self.context = context
        full_message = f"{message}" if not context else f"[{context}] {message}"
        super().__init__(full_message)


class ConfigurationError(IntrospectError):
    """Raised when the connection string or config file is missing or invalid."""

    def __init__(
        self,
        message: str,
        context: str | None = None,
        setting: str | None = None,
    ) -> None:
        self.setting = setting
        if setting:
            message = f"Setting '{setting}': {message}"
        super().__init__(message, context)


class DatabaseConnectionError(IntrospectError):
    """Raised when the database cannot be reached or authentication fails."""


class QueryError(IntrospectError):
    """Raised when a catalog query fails."""

    def __init__(self, message: str, query_name: str | None = None) -> None:
        self.query_name = query_name
        super().__init__(message, query_name)


class NamingCollisionError(IntrospectError):
    """Raised when distinct tables produce the same interface name."""

    def __init__(self, interface_name: str, table_names: Sequence[str]) -> None:
        self.interface_name = interface_name
        self.table_names = tuple(table_names)
        quoted = ", ".join(f"'{name}'" for name in self.table_names)
        super().__init__(f"Interface name '{interface_name}' is produced by {quoted}")


class EmitError(IntrospectError):
    """Raised when rendering, formatting or writing the output fails."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        super().__init__(message, path)
