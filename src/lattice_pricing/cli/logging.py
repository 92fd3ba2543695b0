from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lattice_pricing.cli.config import resolve_path
from lattice_pricing.utils.logging_config import coerce_level, setup_logging

DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": False,
    "module_levels": {},
}

# CLI attribute -> key under the `logging` config section.
_FLAG_KEYS: dict[str, str] = {
    "log_level": "level",
    "log_file": "file",
    "log_format": "format",
    "log_color": "color",
}


def add_logging_args(parser) -> None:
    group = parser.add_argument_group("logging")
    group.add_argument("--log-level", help="Logging level (e.g. INFO, DEBUG).")
    group.add_argument("--log-file", help="Also write logs to this file.")
    group.add_argument("--log-format", help="Console log format string.")
    group.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Enable colored console logs.",
    )
    group.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Disable colored console logs.",
    )
    parser.set_defaults(log_color=None)


def logging_overrides(args) -> dict[str, Any]:
    """Logging config values explicitly set on the command line."""
    return {
        key: getattr(args, attr)
        for attr, key in _FLAG_KEYS.items()
        if getattr(args, attr, None) is not None
    }


def resolve_logging_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    """Fill unset keys from `DEFAULT_LOGGING` and check every level name.

    Raises:
        ValueError: If `level` or a `module_levels` entry is not a known level.
    """
    resolved = dict(DEFAULT_LOGGING)
    for key, value in (config or {}).items():
        if key in resolved and value is not None:
            resolved[key] = value

    coerce_level(resolved["level"])
    for name, level in (resolved["module_levels"] or {}).items():
        try:
            coerce_level(level)
        except ValueError as exc:
            raise ValueError(f"module_levels[{name!r}]: {exc}") from exc
    return resolved


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = resolve_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=resolve_path(log_cfg["file"]),
        module_levels=log_cfg["module_levels"],
        colored=log_cfg["color"],
    )
