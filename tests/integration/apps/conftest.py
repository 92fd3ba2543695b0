from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml


@pytest.fixture
def parse_printed_config():
    def _parse(text: str) -> dict[str, Any]:
        return json.loads(text)

    return _parse


@pytest.fixture
def parse_json_lines():
    def _parse(text: str) -> list[dict[str, Any]]:
        return [json.loads(line) for line in text.splitlines() if line.strip()]

    return _parse


@pytest.fixture
def run_help(capsys):
    def _run(mod, expected: str) -> None:
        with pytest.raises(SystemExit) as exc:
            mod.main(["--help"])
        assert exc.value.code == 0
        out = capsys.readouterr().out
        assert expected in out

    return _run


def _benchmark_data() -> dict[str, Any]:
    return {
        "logging": {"level": "WARNING"},
        "market": {
            "spot": 100.0,
            "rate": 0.06,
            "dividend_yield": 0.0,
            "volatility": 0.2,
            "valuation_date": "2024-01-01",
        },
        "contract": {
            "option_type": "put",
            "strike": 100.0,
            "maturity_date": "2025-01-01",
        },
        "lattice": {"steps": [50, 100]},
    }


@pytest.fixture
def write_config(tmp_path: Path):
    """Write the benchmark scenario with some sections replaced."""

    def _write(sections: dict[str, Any]) -> Path:
        data = _benchmark_data()
        data.update(sections)
        path = tmp_path / "price_american.yml"
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f)
        return path

    return _write


@pytest.fixture
def benchmark_config(write_config) -> Path:
    return write_config({})
