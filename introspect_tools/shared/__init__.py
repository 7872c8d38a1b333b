"""Shared utilities for the introspection tools."""

from .config_loader import (
    Settings,
    load_config_file,
    load_settings,
    read_database_url,
)
from .naming import (
    to_pascal_case,
    is_identifier,
    property_key,
)
from .errors import (
    IntrospectError,
    ConfigurationError,
    DatabaseConnectionError,
    QueryError,
    NamingCollisionError,
    EmitError,
)

__all__ = [
    # Settings
    "Settings",
    "load_config_file",
    "load_settings",
    "read_database_url",
    # Naming utilities
    "to_pascal_case",
    "is_identifier",
    "property_key",
    # Errors
    "IntrospectError",
    "ConfigurationError",
    "DatabaseConnectionError",
    "QueryError",
    "NamingCollisionError",
    "EmitError",
]
