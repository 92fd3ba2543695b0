from __future__ import annotations

import argparse
import importlib
import json
from datetime import date
from pathlib import Path

import pytest

from lattice_pricing.options import InvalidStepCountError


def _cli():
    return importlib.import_module("lattice_pricing.apps._cli")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (500, [500]),
        ([50, 100], [50, 100]),
        ((50, 100), [50, 100]),
    ],
)
def test_as_step_grid_wraps_scalars_and_sequences(value, expected) -> None:
    assert _cli().as_step_grid(value) == expected


@pytest.mark.parametrize("value", [None, [], ()])
def test_as_step_grid_requires_a_step_count(value) -> None:
    with pytest.raises(InvalidStepCountError, match="at least one step count"):
        _cli().as_step_grid(value)


def test_run_mode_args_default_off() -> None:
    parser = argparse.ArgumentParser()
    _cli().add_run_mode_args(parser)

    args = parser.parse_args([])
    assert args.print_config is False
    assert args.dry_run is False
    assert parser.parse_args(["--dry-run"]).dry_run is True


def test_dumps_serializes_dates_paths_and_nested_sequences() -> None:
    text = _cli().dumps(
        {
            "market": {"valuation_date": date(2024, 1, 1)},
            "logging": {"file": Path("logs") / "pricing.log"},
            "lattice": {"steps": (50, 100)},
        }
    )

    assert json.loads(text) == {
        "lattice": {"steps": [50, 100]},
        "logging": {"file": str(Path("logs") / "pricing.log")},
        "market": {"valuation_date": "2024-01-01"},
    }
    assert text.index('"lattice"') < text.index('"logging"') < text.index('"market"')
