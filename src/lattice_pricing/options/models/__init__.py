"""Lattice and closed-form option-pricing models."""

from .binomial_tree import (
    CRRParameters,
    LatticeSlice,
    binomial_tree_price,
    crr_parameters,
    iter_backward_induction,
)
from .black_scholes import bs_d1_d2, bs_price

__all__ = [
    "CRRParameters",
    "LatticeSlice",
    "binomial_tree_price",
    "crr_parameters",
    "iter_backward_induction",
    "bs_d1_d2",
    "bs_price",
]
