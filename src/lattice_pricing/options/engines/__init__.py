"""Pricing engines over validated market and contract objects."""

from .lattice_engine import LatticeEngine, PricingJob

__all__ = [
    "LatticeEngine",
    "PricingJob",
]
