"""Layered YAML configuration for CLI entry points.

Precedence is defaults <- YAML file <- explicit overrides (CLI flags).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml


def add_config_arg(parser, *, default: str | None = None) -> None:
    parser.add_argument(
        "--config",
        default=default,
        help="YAML config; CLI flags override its values.",
    )


def load_yaml_config(path: str | Path | None) -> dict[str, Any]:
    """Read a YAML config file; `None` means no file.

    An empty file is an empty config. Unquoted ISO dates come back as
    `datetime.date`, which the pricing types accept as-is.
    """
    if path is None:
        return {}

    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"{config_path}: expected a YAML mapping at the top level, "
            f"got {type(data).__name__}"
        )
    return data


def config_section(config: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """Return `config[key]` as a mapping; a missing or null section is empty.

    Raises:
        ValueError: If the section holds a scalar or a list.
    """
    section = config.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ValueError(
            f"Config section {key!r} must be a mapping, got {type(section).__name__}"
        )
    return section


def deep_merge(
    base: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    """Recursively merge mappings; non-mapping values in `updates` win.

    Neither input is mutated.
    """
    merged: dict[str, Any] = {
        key: deep_merge(value, {}) if isinstance(value, Mapping) else value
        for key, value in base.items()
    }
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def build_config(
    defaults: Mapping[str, Any],
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    layered = deep_merge(defaults, load_yaml_config(yaml_path))
    return deep_merge(layered, overrides or {})


def resolve_path(value: str | Path | None) -> Path | None:
    """Expand `~` and environment variables in a path-like config value."""
    if value is None:
        return None
    if isinstance(value, Path):
        return value
    return Path(os.path.expandvars(os.path.expanduser(str(value))))
