"""Lattice pricing engine over validated market and contract objects."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from lattice_pricing.options.daycount import ACT_365_FIXED, Actual365Fixed
from lattice_pricing.options.models.binomial_tree import (
    LatticeSlice,
    binomial_tree_price,
    iter_backward_induction,
)
from lattice_pricing.options.models.black_scholes import bs_price
from lattice_pricing.options.types import (
    LatticeSpec,
    MarketSnapshot,
    OptionContract,
    PricingReport,
)

logger = logging.getLogger(__name__)

PricingJob = tuple[MarketSnapshot, OptionContract, int]


@dataclass(frozen=True)
class LatticeEngine:
    """CRR tree pricer for American vanilla options.

    The engine holds no per-call state; every `price(...)` call owns its
    working slice, so one instance can be shared across threads.
    """

    day_counter: Actual365Fixed = ACT_365_FIXED

    def time_to_expiry(
        self, snapshot: MarketSnapshot, contract: OptionContract
    ) -> float:
        """Year fraction from valuation date to maturity."""
        contract.validate_against(snapshot)
        return self.day_counter.year_fraction(
            snapshot.valuation_date, contract.maturity_date
        )

    def price(
        self, snapshot: MarketSnapshot, contract: OptionContract, steps: int
    ) -> float:
        """Return the present value of `contract` on an n-step CRR lattice."""
        spec = LatticeSpec(steps)
        T = self.time_to_expiry(snapshot, contract)
        return binomial_tree_price(
            S=snapshot.spot,
            K=contract.strike,
            T=T,
            sigma=snapshot.volatility,
            r=snapshot.rate,
            q=snapshot.dividend_yield,
            option_type=contract.option_type,
            steps=spec.steps,
        )

    def slices(
        self, snapshot: MarketSnapshot, contract: OptionContract, steps: int
    ) -> Iterator[LatticeSlice]:
        """Iterate the backward induction, maturity first, root last."""
        spec = LatticeSpec(steps)
        T = self.time_to_expiry(snapshot, contract)
        return iter_backward_induction(
            S=snapshot.spot,
            K=contract.strike,
            T=T,
            sigma=snapshot.volatility,
            r=snapshot.rate,
            q=snapshot.dividend_yield,
            option_type=contract.option_type,
            steps=spec.steps,
        )

    def report(
        self, snapshot: MarketSnapshot, contract: OptionContract, steps: int
    ) -> PricingReport:
        """Price the contract and compare it with its European counterpart."""
        american = self.price(snapshot, contract, steps)
        T = self.time_to_expiry(snapshot, contract)
        european = bs_price(
            S=snapshot.spot,
            K=contract.strike,
            T=T,
            sigma=snapshot.volatility,
            r=snapshot.rate,
            q=snapshot.dividend_yield,
            option_type=contract.option_type,
        )
        return PricingReport(
            price=american,
            european_price=european,
            time_to_expiry=T,
            steps=int(steps),
            option_type=contract.option_type,
        )

    def convergence(
        self,
        snapshot: MarketSnapshot,
        contract: OptionContract,
        steps_grid: Iterable[int],
    ) -> list[PricingReport]:
        """Price the same contract for each step count in `steps_grid`."""
        reports = [self.report(snapshot, contract, n) for n in steps_grid]
        for prev, cur in zip(reports, reports[1:]):
            logger.debug(
                "steps %d -> %d: price change %.6g",
                prev.steps,
                cur.steps,
                cur.price - prev.price,
            )
        return reports

    def price_many(
        self, jobs: Sequence[PricingJob], *, max_workers: int = 1
    ) -> list[float]:
        """Price independent `(snapshot, contract, steps)` jobs.

        Results keep the input order. With `max_workers > 1` jobs run on a
        thread pool; the first failing job re-raises its error.
        """
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        logger.debug("Pricing %d jobs with max_workers=%d", len(jobs), max_workers)
        if max_workers == 1:
            return [self.price(*job) for job in jobs]

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(self.price, *job) for job in jobs]
            return [fut.result() for fut in futures]
