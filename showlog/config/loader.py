from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..services.normalizer import DEFAULT_COLUMNS

"""Config loader for the shows builder.

Resolution order (later wins):
1. built-in defaults (data/shows.csv -> data/shows.json)
2. YAML file (config/build.yml unless --config is given), validated against build_schema.json
3. environment variables SHOWLOG_INPUT / SHOWLOG_OUTPUT / SHOWLOG_SOURCE (.env is loaded by the CLI)
4. CLI --input / --output (applied by the CLI via with_overrides)
"""

__all__ = [
    "BuildConfig",
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("build_schema.json")
DEFAULT_CONFIG_PATH = Path("config/build.yml")

DEFAULT_INPUT = "data/shows.csv"
DEFAULT_OUTPUT = "data/shows.json"

ENV_INPUT = "SHOWLOG_INPUT"
ENV_OUTPUT = "SHOWLOG_OUTPUT"
ENV_SOURCE = "SHOWLOG_SOURCE"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class BuildConfig:
    """Resolved settings for one build run."""
    input_path: Path = Path(DEFAULT_INPUT)
    output_path: Path = Path(DEFAULT_OUTPUT)
    source: str | None = None  # provenance string; None -> input path in POSIX form
    columns: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLUMNS))

    @property
    def source_label(self) -> str:
        return self.source if self.source else self.input_path.as_posix()

    def with_overrides(
        self, input_path: Path | None = None, output_path: Path | None = None
    ) -> BuildConfig:
        return BuildConfig(
            input_path=input_path or self.input_path,
            output_path=output_path or self.output_path,
            source=self.source,
            columns=dict(self.columns),
        )


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the packaged JSON schema.

    Raises:
        ConfigError: If the schema file is unreadable or the data violates it
            (unknown keys, wrong types, unknown column keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return data


def load_config(path: Path | None = None) -> BuildConfig:
    """Load the build configuration.

    Parameters:
        path: Explicit config file. None means DEFAULT_CONFIG_PATH, which may be
            absent (defaults are used); an explicit path must exist.

    Raises:
        ConfigError: Missing explicit file, invalid YAML or schema violation
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        data = _read_yaml(path) if path.exists() else {}
    else:
        if not path.exists():
            raise ConfigError(f"config file not found: {path}")
        data = _read_yaml(path)

    _validate_config_schema(data)

    columns = dict(DEFAULT_COLUMNS)
    columns.update(data.get("columns") or {})

    input_path = os.getenv(ENV_INPUT) or data.get("input", DEFAULT_INPUT)
    output_path = os.getenv(ENV_OUTPUT) or data.get("output", DEFAULT_OUTPUT)
    source = os.getenv(ENV_SOURCE) or data.get("source")

    return BuildConfig(
        input_path=Path(input_path),
        output_path=Path(output_path),
        source=source,
        columns=columns,
    )
