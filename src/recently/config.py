"""Configuration discovery, loading and validation.

Configuration is searched upward from the working directory in:

    .recentlyrc.json
    .recentlyrc.yaml / .recentlyrc.yml
    .recentlyrc.toml
    pyproject.toml ([tool.recently] table)

and validated against the packaged `config.schema.json`.
"""

from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass, field
from functools import lru_cache
from importlib.resources import files
from pathlib import Path
from typing import Any

import yaml
from jsonschema.validators import Draft202012Validator

from recently.errors import ConfigError
from recently.git.recent import DEFAULT_DAYS
from recently.messages import config_error
from recently.ui import Logger
from recently.validator import validate_and_fix_braces, warn_unbalanced_brackets

logger = logging.getLogger(__name__)

CONFIG_NAME = "recently"

SEARCH_PLACES: tuple[str, ...] = (
    f".{CONFIG_NAME}rc.json",
    f".{CONFIG_NAME}rc.yaml",
    f".{CONFIG_NAME}rc.yml",
    f".{CONFIG_NAME}rc.toml",
    "pyproject.toml",
)


@dataclass(frozen=True)
class Config:
    """Validated configuration: glob pattern -> command(s), plus the day window."""

    patterns: dict[str, str | list[str]] = field(default_factory=dict)
    days: int = DEFAULT_DAYS


@dataclass(frozen=True)
class LoadedConfig:
    """Raw configuration together with where it came from."""

    config: dict[str, Any]
    filepath: str


def _read_file(path: Path) -> dict[str, Any] | None:
    """Parse a config file by suffix; None when a pyproject has no [tool.recently]."""
    suffix = path.suffix.lower()
    try:
        if path.name == "pyproject.toml":
            with open(path, "rb") as f:
                data = tomllib.load(f)
            return data.get("tool", {}).get(CONFIG_NAME)
        if suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f)
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(path.read_text(encoding="utf-8"))
        return json.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Malformed TOML config at {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed YAML config at {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed JSON config at {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config at {path}: {e}") from e


def search_config(start: Path) -> LoadedConfig | None:
    """Walk up from `start` and return the first config found."""
    current = start.resolve()
    while True:
        for name in SEARCH_PLACES:
            candidate = current / name
            if not candidate.is_file():
                continue
            data = _read_file(candidate)
            if data is not None:
                return LoadedConfig(config=data, filepath=str(candidate))
        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(config_path: Path | str | None = None, cwd: Path | None = None) -> LoadedConfig | None:
    """Load config from an explicit path, or search for one from `cwd` upward."""
    if config_path is None:
        return search_config(cwd or Path.cwd())

    path = Path(config_path)
    if not path.is_absolute() and cwd is not None:
        path = cwd / path
    if not path.is_file():
        return None
    data = _read_file(path)
    if data is None:
        return None
    return LoadedConfig(config=data, filepath=str(path))


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    text = files("recently.schemas").joinpath("config.schema.json").read_text(encoding="utf-8")
    return json.loads(text)


def schema_errors(raw: Any) -> list[str]:
    validator = Draft202012Validator(load_schema())
    return [
        f"{'.'.join(str(p) for p in e.path)}: {e.message}" if e.path else e.message
        for e in sorted(validator.iter_errors(raw), key=lambda e: [str(p) for p in e.path])
    ]


def validate_config(raw: Any, log: Logger) -> Config:
    """Validate raw configuration and repair single-value brace patterns.

    Raises:
        ConfigError: If the configuration does not satisfy the schema.
    """
    logger.debug("Validating config")
    errors = schema_errors(raw)
    if errors:
        message = "\n\n".join(errors)
        log.error(config_error(message))
        raise ConfigError(message)

    patterns: dict[str, str | list[str]] = {}
    for pattern, commands in raw["patterns"].items():
        # A typical mistake is `*.{js}`; it is fixed here and warned about.
        fixed = validate_and_fix_braces(pattern, log)
        warn_unbalanced_brackets(fixed, log)
        patterns[fixed] = commands

    return Config(patterns=patterns, days=raw.get("days", DEFAULT_DAYS))
