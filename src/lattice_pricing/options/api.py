"""Flat scalar entry points for host applications."""

from __future__ import annotations

from lattice_pricing.options.engines.lattice_engine import LatticeEngine
from lattice_pricing.options.types import (
    MarketSnapshot,
    OptionContract,
    OptionType,
    OptionTypeInput,
)

_ENGINE = LatticeEngine()


def price(
    spot: float,
    strike: float,
    rate: float,
    dividend_yield: float,
    volatility: float,
    valuation_year: int,
    valuation_month: int,
    valuation_day: int,
    maturity_year: int,
    maturity_month: int,
    maturity_day: int,
    option_type: OptionTypeInput,
    steps: int,
) -> float:
    """Price an American vanilla option from raw scalars and calendar dates.

    Rates, yield and volatility are annualized decimals; dates are proleptic
    Gregorian `(year, month, day)` with 1-based months. The result is in the
    currency unit of `spot` and `strike`.

    Raises:
        PricingInputError: One of its subclasses, naming the offending input.
    """
    snapshot = MarketSnapshot(
        spot=spot,
        volatility=volatility,
        valuation_date=(valuation_year, valuation_month, valuation_day),
        rate=rate,
        dividend_yield=dividend_yield,
    )
    contract = OptionContract(
        option_type=option_type,
        strike=strike,
        maturity_date=(maturity_year, maturity_month, maturity_day),
    )
    contract.validate_against(snapshot)
    return _ENGINE.price(snapshot, contract, steps)


def price_american_put(
    spot: float,
    strike: float,
    rate: float,
    dividend_yield: float,
    volatility: float,
    valuation_year: int,
    valuation_month: int,
    valuation_day: int,
    maturity_year: int,
    maturity_month: int,
    maturity_day: int,
    steps: int,
) -> float:
    """Put-only variant of `price(...)` with the same positional layout."""
    return price(
        spot,
        strike,
        rate,
        dividend_yield,
        volatility,
        valuation_year,
        valuation_month,
        valuation_day,
        maturity_year,
        maturity_month,
        maturity_day,
        OptionType.PUT,
        steps,
    )
