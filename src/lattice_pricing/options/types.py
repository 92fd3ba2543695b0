"""Validated market, contract, and lattice dataclasses."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Literal, TypeAlias

import numpy as np

from lattice_pricing.options.daycount import coerce_date
from lattice_pricing.options.errors import (
    InvalidContractError,
    InvalidMarketDataError,
    InvalidStepCountError,
)


class OptionType(StrEnum):
    """Canonical option side labels used across pricing code."""

    CALL = "call"
    PUT = "put"


class ExerciseStyle(StrEnum):
    """Exercise styles supported by the lattice engine."""

    AMERICAN = "american"


# Tolerant input type accepted at system boundaries (config files/tests).
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]


def normalize_option_type(option_type: OptionTypeInput | str) -> OptionType:
    """Normalize option type labels to `OptionType`.

    Raises:
        InvalidContractError: If the label is not a call/put alias.
    """
    if isinstance(option_type, OptionType):
        return option_type
    label = str(option_type).strip().lower()
    if label in ("call", "c"):
        return OptionType.CALL
    if label in ("put", "p"):
        return OptionType.PUT
    raise InvalidContractError(
        f"option_type must be one of {{'call', 'put', 'C', 'P'}}, got {option_type!r}"
    )


def _require_finite(name: str, value: float, error: type[Exception]) -> float:
    if isinstance(value, bool):
        raise error(f"{name} must be a real number, got {value!r}")
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise error(f"{name} must be a real number, got {value!r}") from exc
    if not math.isfinite(out):
        raise error(f"{name} must be finite, got {value!r}")
    return out


@dataclass(frozen=True)
class MarketSnapshot:
    """Flat market state as of `valuation_date` (t=0).

    Units:
    - `rate`, `dividend_yield`: annualized, continuously compounded decimals
    - `volatility`: annualized Black volatility in decimals (0.2 = 20 vol)
    """

    spot: float
    volatility: float
    valuation_date: date
    rate: float = 0.0
    dividend_yield: float = 0.0

    def __post_init__(self) -> None:
        spot = _require_finite("spot", self.spot, InvalidMarketDataError)
        volatility = _require_finite(
            "volatility", self.volatility, InvalidMarketDataError
        )
        rate = _require_finite("rate", self.rate, InvalidMarketDataError)
        dividend_yield = _require_finite(
            "dividend_yield", self.dividend_yield, InvalidMarketDataError
        )
        if spot <= 0:
            raise InvalidMarketDataError(f"spot must be > 0, got {self.spot!r}")
        if volatility <= 0:
            raise InvalidMarketDataError(
                f"volatility must be > 0, got {self.volatility!r}"
            )

        object.__setattr__(self, "spot", spot)
        object.__setattr__(self, "volatility", volatility)
        object.__setattr__(self, "rate", rate)
        object.__setattr__(self, "dividend_yield", dividend_yield)
        object.__setattr__(self, "valuation_date", coerce_date(self.valuation_date))


@dataclass(frozen=True)
class OptionContract:
    """Vanilla American option terms."""

    option_type: OptionType
    strike: float
    maturity_date: date
    exercise_style: ExerciseStyle = ExerciseStyle.AMERICAN

    def __post_init__(self) -> None:
        strike = _require_finite("strike", self.strike, InvalidContractError)
        if strike <= 0:
            raise InvalidContractError(f"strike must be > 0, got {self.strike!r}")

        try:
            style = ExerciseStyle(str(self.exercise_style).lower())
        except ValueError as exc:
            raise InvalidContractError(
                f"exercise_style must be 'american', got {self.exercise_style!r}"
            ) from exc

        object.__setattr__(self, "strike", strike)
        object.__setattr__(self, "option_type", normalize_option_type(self.option_type))
        object.__setattr__(self, "exercise_style", style)
        object.__setattr__(self, "maturity_date", coerce_date(self.maturity_date))

    def validate_against(self, snapshot: MarketSnapshot) -> None:
        """Check that maturity falls strictly after the snapshot valuation date.

        Raises:
            InvalidContractError: If `maturity_date <= snapshot.valuation_date`.
        """
        if self.maturity_date <= snapshot.valuation_date:
            raise InvalidContractError(
                f"maturity_date {self.maturity_date.isoformat()} must be after "
                f"valuation_date {snapshot.valuation_date.isoformat()}"
            )

    def intrinsic(self, spot: np.ndarray | float) -> np.ndarray:
        """Immediate exercise payoff, vectorized over spot."""
        return intrinsic_value(spot, self.strike, self.option_type)


@dataclass(frozen=True)
class LatticeSpec:
    """Lattice resolution for one pricing request."""

    steps: int

    def __post_init__(self) -> None:
        if isinstance(self.steps, bool) or not isinstance(self.steps, (int, np.integer)):
            raise InvalidStepCountError(
                f"steps must be an integer >= 1, got {self.steps!r}"
            )
        if self.steps < 1:
            raise InvalidStepCountError(f"steps must be >= 1, got {self.steps!r}")
        object.__setattr__(self, "steps", int(self.steps))


@dataclass(frozen=True, slots=True)
class PricingReport:
    """Lattice value with its European counterpart.

    `early_exercise_premium` is `price - european_price`; it can be slightly
    negative from lattice discretization when early exercise is worthless.
    """

    price: float
    european_price: float
    time_to_expiry: float
    steps: int
    option_type: OptionType

    @property
    def early_exercise_premium(self) -> float:
        return self.price - self.european_price

    def to_dict(self) -> dict[str, float | int | str]:
        return {
            "option_type": str(self.option_type),
            "steps": self.steps,
            "time_to_expiry": self.time_to_expiry,
            "price": self.price,
            "european_price": self.european_price,
            "early_exercise_premium": self.early_exercise_premium,
        }


def intrinsic_value(
    spot: np.ndarray | float, strike: float, option_type: OptionType
) -> np.ndarray:
    if option_type == OptionType.CALL:
        return np.maximum(np.asarray(spot, dtype=float) - strike, 0.0)
    return np.maximum(strike - np.asarray(spot, dtype=float), 0.0)
