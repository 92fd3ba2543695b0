"""Error taxonomy for lattice pricing inputs.

Every error subclasses `PricingInputError`, itself a `ValueError`, so callers
can catch the family or one specific kind. Messages name the offending input.
"""

from __future__ import annotations


class PricingInputError(ValueError):
    """Base class for deterministic, non-retryable pricing input failures."""


class InvalidMarketDataError(PricingInputError):
    """Non-positive or non-finite spot/volatility, or non-finite rates."""


class InvalidContractError(PricingInputError):
    """Non-positive strike, unknown payoff/exercise, or maturity not after valuation."""


class InvalidDateRangeError(PricingInputError):
    """End date precedes start date, or a date input cannot be parsed."""


class InvalidStepCountError(PricingInputError):
    """Lattice step count below 1 or not an integer."""


class ArbitrageConditionError(PricingInputError):
    """CRR risk-neutral probability outside [0, 1] for the chosen step size."""

    def __init__(self, probability: float, steps: int, dt: float) -> None:
        self.probability = probability
        self.steps = steps
        self.dt = dt
        super().__init__(
            f"Invalid CRR risk-neutral probability p={probability:.6f} "
            f"(steps={steps}, dt={dt:.6g}); increase steps or check "
            "rate/dividend_yield/volatility."
        )
