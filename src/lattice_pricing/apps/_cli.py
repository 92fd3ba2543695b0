"""Run-mode flags and JSON output helpers shared by pricing entry points."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import date
from pathlib import Path
from typing import Any

from lattice_pricing.options import InvalidStepCountError


def as_step_grid(value: Any) -> list[Any]:
    """Read `lattice.steps` as a list; a bare scalar is a one-point grid.

    Raises:
        InvalidStepCountError: If no step count is configured.
    """
    if value is None:
        grid: list[Any] = []
    elif isinstance(value, (list, tuple)):
        grid = list(value)
    else:
        grid = [value]

    if not grid:
        raise InvalidStepCountError("lattice.steps must list at least one step count")
    return grid


def add_run_mode_args(parser) -> None:
    """Add `--print-config` and `--dry-run` to a pricing parser."""
    group = parser.add_argument_group("run mode")
    group.add_argument(
        "--print-config",
        action="store_true",
        help="Print the merged config as JSON and exit.",
    )
    group.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate inputs and log the pricing plan without pricing.",
    )


def to_jsonable(obj: Any) -> Any:
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Mapping):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return obj


def dumps(obj: Any, *, indent: int | None = None) -> str:
    """Deterministic JSON text for configs, plans and report lines."""
    return json.dumps(to_jsonable(obj), indent=indent, sort_keys=True)


def log_dry_run(logger: logging.Logger, plan: Mapping[str, Any]) -> None:
    logger.info("DRY RUN: no pricing was executed.")
    logger.info("DRY RUN plan:\n%s", dumps(plan, indent=2))
