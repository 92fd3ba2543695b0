"""American option pricing on a CRR binomial lattice."""

from .api import price, price_american_put
from .daycount import Actual365Fixed, coerce_date, year_fraction
from .engines import LatticeEngine, PricingJob
from .errors import (
    ArbitrageConditionError,
    InvalidContractError,
    InvalidDateRangeError,
    InvalidMarketDataError,
    InvalidStepCountError,
    PricingInputError,
)
from .models import (
    CRRParameters,
    LatticeSlice,
    binomial_tree_price,
    bs_price,
    crr_parameters,
    iter_backward_induction,
)
from .types import (
    ExerciseStyle,
    LatticeSpec,
    MarketSnapshot,
    OptionContract,
    OptionType,
    OptionTypeInput,
    PricingReport,
    normalize_option_type,
)

__all__ = [
    "OptionType",
    "OptionTypeInput",
    "ExerciseStyle",
    "MarketSnapshot",
    "OptionContract",
    "LatticeSpec",
    "PricingReport",
    "normalize_option_type",
    "Actual365Fixed",
    "coerce_date",
    "year_fraction",
    "LatticeEngine",
    "PricingJob",
    "CRRParameters",
    "LatticeSlice",
    "binomial_tree_price",
    "crr_parameters",
    "iter_backward_induction",
    "bs_price",
    "price",
    "price_american_put",
    "PricingInputError",
    "InvalidMarketDataError",
    "InvalidContractError",
    "InvalidDateRangeError",
    "InvalidStepCountError",
    "ArbitrageConditionError",
]
