"""CRR binomial-tree pricing for American vanilla options."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from lattice_pricing.options.errors import (
    ArbitrageConditionError,
    InvalidContractError,
    InvalidDateRangeError,
    InvalidMarketDataError,
    InvalidStepCountError,
)
from lattice_pricing.options.types import (
    OptionType,
    OptionTypeInput,
    intrinsic_value,
    normalize_option_type,
)

logger = logging.getLogger(__name__)

_MAX_NODE_SPOT: float = 1e300
_MAX_LOG_NODE_SPOT: float = float(np.log(_MAX_NODE_SPOT))


@dataclass(frozen=True, slots=True)
class CRRParameters:
    """Per-step lattice parameters derived from flat market inputs."""

    dt: float
    up: float
    down: float
    growth: float
    probability: float
    discount: float


@dataclass(frozen=True)
class LatticeSlice:
    """One time slice of the backward induction.

    `spots[j]` and `values[j]` refer to the node with `j` up-moves.
    """

    step: int
    spots: np.ndarray
    values: np.ndarray
    intrinsic: np.ndarray


def crr_parameters(
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    steps: int = 200,
) -> CRRParameters:
    """Derive CRR up/down factors, risk-neutral probability and discounting.

    Raises:
        InvalidStepCountError: If `steps < 1`.
        ArbitrageConditionError: If the up-probability falls outside [0, 1].
    """
    if steps < 1:
        raise InvalidStepCountError(f"steps must be >= 1, got {steps!r}")

    dt = T / steps
    u = float(np.exp(sigma * np.sqrt(dt)))
    d = 1.0 / u
    growth = float(np.exp((r - q) * dt))
    p = (growth - d) / (u - d)

    if not 0.0 <= p <= 1.0:
        raise ArbitrageConditionError(probability=p, steps=steps, dt=dt)

    return CRRParameters(
        dt=dt,
        up=u,
        down=d,
        growth=growth,
        probability=p,
        discount=float(np.exp(-r * dt)),
    )


def _node_spots(S: float, params: CRRParameters, step: int) -> np.ndarray:
    # d = 1/u, so node j sits at S * u**(2j - step). Node prices are capped at
    # _MAX_NODE_SPOT to keep payoffs and continuation sums finite.
    net_up_moves = 2 * np.arange(step + 1) - step
    log_spots = np.log(S) + net_up_moves * np.log(params.up)
    return np.exp(np.minimum(log_spots, _MAX_LOG_NODE_SPOT))


def _validate_scalars(S: float, K: float, T: float, sigma: float) -> None:
    if S <= 0:
        raise InvalidMarketDataError(f"spot must be > 0, got {S!r}")
    if sigma <= 0:
        raise InvalidMarketDataError(f"volatility must be > 0, got {sigma!r}")
    if K <= 0:
        raise InvalidContractError(f"strike must be > 0, got {K!r}")
    if T < 0:
        raise InvalidDateRangeError(f"T must be non-negative, got {T!r}")


def iter_backward_induction(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.PUT,
    steps: int = 200,
) -> Iterator[LatticeSlice]:
    """Yield lattice slices from maturity back to the root node.

    The first slice is the terminal payoff at `step == steps`; the last one is
    the root at `step == 0`, whose single value is the option price. Every
    interior slice already includes the early-exercise comparison.

    Raises:
        InvalidStepCountError, InvalidMarketDataError, InvalidContractError,
        InvalidDateRangeError, ArbitrageConditionError: On invalid inputs.
    """
    _validate_scalars(S, K, T, sigma)
    if T == 0:
        raise InvalidDateRangeError("T must be > 0 to build a lattice")

    opt_type = normalize_option_type(option_type)
    params = crr_parameters(T=T, sigma=sigma, r=r, q=q, steps=steps)
    logger.debug(
        "CRR lattice: steps=%d dt=%.6g u=%.8f d=%.8f p=%.8f disc=%.8f",
        steps,
        params.dt,
        params.up,
        params.down,
        params.probability,
        params.discount,
    )

    p = params.probability
    spots = _node_spots(S, params, steps)
    intrinsic = intrinsic_value(spots, K, opt_type)
    option_vals = intrinsic
    yield LatticeSlice(step=steps, spots=spots, values=option_vals, intrinsic=intrinsic)

    for step in range(steps - 1, -1, -1):
        continuation = params.discount * (
            p * option_vals[1:] + (1.0 - p) * option_vals[:-1]
        )
        spots = _node_spots(S, params, step)
        intrinsic = intrinsic_value(spots, K, opt_type)
        option_vals = np.maximum(continuation, intrinsic)
        yield LatticeSlice(
            step=step, spots=spots, values=option_vals, intrinsic=intrinsic
        )


def binomial_tree_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    q: float = 0.0,
    option_type: OptionTypeInput = OptionType.PUT,
    steps: int = 200,
) -> float:
    """Price an American vanilla option with a Cox-Ross-Rubinstein tree.

    Args:
        S: Spot price.
        K: Strike price.
        T: Time to expiry in years.
        sigma: Annualized volatility in decimals.
        r: Continuously-compounded risk-free rate.
        q: Continuously-compounded dividend yield.
        option_type: One of `{'call', 'put', 'C', 'P'}`.
        steps: Number of binomial time steps.

    Returns:
        Present value for one option. A zero `T` returns intrinsic value.

    Raises:
        InvalidStepCountError: If `steps < 1`.
        InvalidMarketDataError: If `S <= 0` or `sigma <= 0`.
        InvalidContractError: If `K <= 0` or the option type is unknown.
        InvalidDateRangeError: If `T < 0`.
        ArbitrageConditionError: If CRR probabilities become invalid for the
            selected parameters.
    """
    if steps < 1:
        raise InvalidStepCountError(f"steps must be >= 1, got {steps!r}")
    _validate_scalars(S, K, T, sigma)

    opt_type = normalize_option_type(option_type)
    if T == 0:
        return float(intrinsic_value(S, K, opt_type))

    root = None
    for root in iter_backward_induction(
        S=S, K=K, T=T, sigma=sigma, r=r, q=q, option_type=opt_type, steps=steps
    ):
        pass
    return float(root.values[0])
