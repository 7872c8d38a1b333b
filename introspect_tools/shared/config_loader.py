"""Settings loading: environment connection string plus optional YAML file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final, Mapping

import psycopg
import yaml
from psycopg.conninfo import conninfo_to_dict

from .errors import ConfigurationError

DATABASE_URL_ENV: Final[str] = "DATABASE_URL"
DEFAULT_CONFIG_FILE: Final[str] = "introspect.yaml"
DEFAULT_OUTPUT: Final[str] = "schema.d.ts"
DEFAULT_SCHEMA: Final[str] = "public"
FORMATTERS: Final[frozenset[str]] = frozenset({"builtin", "prettier"})
OVERRIDE_TYPES: Final[frozenset[str]] = frozenset(
    {"string", "number", "boolean", "unknown"}
)


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved settings for a single run."""

    database_url: str
    output: Path = Path(DEFAULT_OUTPUT)
    schema: str = DEFAULT_SCHEMA
    formatter: str = "builtin"
    tab_width: int = 2
    type_overrides: Mapping[str, str] = field(default_factory=dict)


def read_database_url(environ: Mapping[str, str] | None = None) -> str:
    """Read and validate the connection string from the environment.

    Raises:
        ConfigurationError: If the variable is missing, empty or unparseable.
    """
    env = os.environ if environ is None else environ
    url = env.get(DATABASE_URL_ENV, "").strip()
    if not url:
        raise ConfigurationError(
            "environment variable is not set", setting=DATABASE_URL_ENV
        )

    try:
        conninfo_to_dict(url)
    except psycopg.ProgrammingError as e:
        raise ConfigurationError(
            f"malformed connection string: {e}", setting=DATABASE_URL_ENV
        ) from e

    return url


def load_config_file(config_path: Path) -> dict[str, Any]:
    """Load a YAML config file.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read config file: {e}", str(config_path)
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", str(config_path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Config root must be a mapping", str(config_path))

    return data


def _validate(raw: dict[str, Any], source: str | None) -> dict[str, Any]:
    known = {"output", "schema", "formatter", "tab_width", "type_overrides"}
    unknown = sorted(set(raw) - known, key=str)
    if unknown:
        raise ConfigurationError(
            f"unknown key(s): {', '.join(map(str, unknown))}", source
        )

    values: dict[str, Any] = {}

    for key in ("output", "schema"):
        if key in raw:
            if not isinstance(raw[key], str) or not raw[key]:
                raise ConfigurationError("must be a non-empty string", source, key)
            values[key] = raw[key]

    if "formatter" in raw:
        formatter = raw["formatter"]
        if not isinstance(formatter, str) or formatter not in FORMATTERS:
            raise ConfigurationError(
                f"must be one of {', '.join(sorted(FORMATTERS))}", source, "formatter"
            )
        values["formatter"] = formatter

    if "tab_width" in raw:
        width = raw["tab_width"]
        # bool is an int subclass
        if isinstance(width, bool) or not isinstance(width, int) or width < 1:
            raise ConfigurationError("must be a positive integer", source, "tab_width")
        values["tab_width"] = width

    if "type_overrides" in raw:
        overrides = raw["type_overrides"]
        if not isinstance(overrides, dict):
            raise ConfigurationError("must be a mapping", source, "type_overrides")
        for storage_type, target in overrides.items():
            if not isinstance(target, str) or target not in OVERRIDE_TYPES:
                raise ConfigurationError(
                    f"'{storage_type}' maps to '{target}', expected one of "
                    f"{', '.join(sorted(OVERRIDE_TYPES))}",
                    source,
                    "type_overrides",
                )
        values["type_overrides"] = {str(k): v for k, v in overrides.items()}

    return values


def load_settings(
    config_path: Path | None = None,
    output: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve settings from the environment, config file and CLI overrides.

    An explicitly passed config file must exist; the default
    ``introspect.yaml`` is only read when present.

    Raises:
        ConfigurationError: On any missing or invalid setting.
    """
    database_url = read_database_url(environ)

    raw: dict[str, Any] = {}
    source: str | None = None
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigurationError(
                f"Config file '{config_path}' does not exist", setting="config"
            )
        raw = load_config_file(config_path)
        source = str(config_path)
    else:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.is_file():
            raw = load_config_file(default_path)
            source = str(default_path)

    values = _validate(raw, source)
    if "output" in values:
        values["output"] = Path(values["output"])
    if output is not None:
        values["output"] = output

    return Settings(database_url=database_url, **values)
