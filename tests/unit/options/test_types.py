from datetime import date

import numpy as np
import pytest

from lattice_pricing.options import (
    ExerciseStyle,
    InvalidContractError,
    InvalidMarketDataError,
    InvalidStepCountError,
    LatticeSpec,
    MarketSnapshot,
    OptionContract,
    OptionType,
    PricingInputError,
    PricingReport,
    normalize_option_type,
)


def _snapshot(**overrides) -> MarketSnapshot:
    kwargs = {
        "spot": 100.0,
        "volatility": 0.2,
        "valuation_date": date(2024, 1, 1),
        "rate": 0.06,
        "dividend_yield": 0.0,
    }
    kwargs.update(overrides)
    return MarketSnapshot(**kwargs)


def test_market_snapshot_is_frozen_and_coerces_inputs():
    snapshot = _snapshot(spot=100, valuation_date="2024-01-01")

    assert snapshot.spot == 100.0
    assert isinstance(snapshot.spot, float)
    assert snapshot.valuation_date == date(2024, 1, 1)
    with pytest.raises(AttributeError):
        snapshot.spot = 101.0  # type: ignore[misc]


@pytest.mark.parametrize(
    ("field", "value", "message"),
    [
        ("spot", 0.0, "spot must be > 0"),
        ("spot", -5.0, "spot must be > 0"),
        ("volatility", 0.0, "volatility must be > 0"),
        ("volatility", -0.1, "volatility must be > 0"),
        ("spot", float("nan"), "spot must be finite"),
        ("rate", float("inf"), "rate must be finite"),
        ("spot", None, "spot must be a real number"),
    ],
)
def test_market_snapshot_rejects_invalid_values(field, value, message):
    with pytest.raises(InvalidMarketDataError, match=message):
        _snapshot(**{field: value})


def test_negative_rates_and_yields_are_valid_market_data():
    snapshot = _snapshot(rate=-0.005, dividend_yield=-0.01)
    assert snapshot.rate == pytest.approx(-0.005)
    assert snapshot.dividend_yield == pytest.approx(-0.01)


def test_option_contract_normalizes_type_and_style():
    contract = OptionContract(option_type="P", strike=95, maturity_date="2025-01-01")

    assert contract.option_type is OptionType.PUT
    assert contract.exercise_style is ExerciseStyle.AMERICAN
    assert contract.strike == 95.0
    assert contract.maturity_date == date(2025, 1, 1)


@pytest.mark.parametrize("strike", [0.0, -1.0, float("nan")])
def test_option_contract_rejects_invalid_strike(strike):
    with pytest.raises(InvalidContractError, match="strike"):
        OptionContract(
            option_type=OptionType.CALL, strike=strike, maturity_date=date(2025, 1, 1)
        )


def test_option_contract_rejects_unknown_type_and_style():
    with pytest.raises(InvalidContractError, match="option_type"):
        OptionContract(option_type="straddle", strike=100.0, maturity_date="2025-01-01")
    with pytest.raises(InvalidContractError, match="exercise_style"):
        OptionContract(
            option_type="call",
            strike=100.0,
            maturity_date="2025-01-01",
            exercise_style="european",  # type: ignore[arg-type]
        )


@pytest.mark.parametrize("maturity", [date(2024, 1, 1), date(2023, 12, 31)])
def test_validate_against_requires_maturity_after_valuation(maturity):
    contract = OptionContract(
        option_type=OptionType.PUT, strike=100.0, maturity_date=maturity
    )
    with pytest.raises(InvalidContractError, match="must be after"):
        contract.validate_against(_snapshot())


def test_contract_intrinsic_is_vectorized():
    call = OptionContract(option_type="call", strike=100.0, maturity_date="2025-01-01")
    put = OptionContract(option_type="put", strike=100.0, maturity_date="2025-01-01")
    spots = np.array([80.0, 100.0, 120.0])

    np.testing.assert_allclose(call.intrinsic(spots), [0.0, 0.0, 20.0])
    np.testing.assert_allclose(put.intrinsic(spots), [20.0, 0.0, 0.0])


@pytest.mark.parametrize("steps", [0, -3, 2.5, True, "10"])
def test_lattice_spec_rejects_invalid_steps(steps):
    with pytest.raises(InvalidStepCountError):
        LatticeSpec(steps)


def test_lattice_spec_accepts_numpy_integers():
    assert LatticeSpec(np.int64(25)).steps == 25


@pytest.mark.parametrize("label", ["call", "C", "c", " CALL "])
def test_normalize_option_type_call_aliases(label):
    assert normalize_option_type(label) is OptionType.CALL


def test_pricing_errors_share_value_error_base():
    assert issubclass(InvalidMarketDataError, PricingInputError)
    assert issubclass(PricingInputError, ValueError)


def test_pricing_report_premium_and_dict():
    report = PricingReport(
        price=6.0,
        european_price=5.5,
        time_to_expiry=1.0,
        steps=100,
        option_type=OptionType.PUT,
    )

    assert report.early_exercise_premium == pytest.approx(0.5)
    assert report.to_dict() == {
        "option_type": "put",
        "steps": 100,
        "time_to_expiry": 1.0,
        "price": 6.0,
        "european_price": 5.5,
        "early_exercise_premium": pytest.approx(0.5),
    }


@pytest.mark.parametrize("field", ["spot", "volatility", "rate", "dividend_yield"])
def test_market_snapshot_rejects_booleans(field):
    with pytest.raises(InvalidMarketDataError, match=f"{field} must be a real number"):
        _snapshot(**{field: True})


def test_option_contract_rejects_boolean_strike():
    with pytest.raises(InvalidContractError, match="strike must be a real number"):
        OptionContract(option_type="put", strike=True, maturity_date=date(2025, 1, 1))
