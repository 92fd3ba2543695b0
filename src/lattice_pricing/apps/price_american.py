#!/usr/bin/env python
"""Price an American option on a CRR lattice from YAML config and CLI flags."""

from __future__ import annotations

import argparse
import logging
from dataclasses import asdict
from typing import Any

from lattice_pricing.apps._cli import (
    add_run_mode_args,
    as_step_grid,
    dumps,
    log_dry_run,
)
from lattice_pricing.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    config_section,
    logging_overrides,
    setup_logging_from_config,
)
from lattice_pricing.options import (
    ArbitrageConditionError,
    InvalidContractError,
    InvalidDateRangeError,
    InvalidMarketDataError,
    InvalidStepCountError,
    LatticeEngine,
    MarketSnapshot,
    OptionContract,
    PricingInputError,
)

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "dry_run": False,
    "market": {
        "spot": None,
        "rate": 0.0,
        "dividend_yield": 0.0,
        "volatility": None,
        "valuation_date": None,
    },
    "contract": {
        "option_type": "put",
        "strike": None,
        "maturity_date": None,
    },
    "lattice": {
        "steps": [500],
    },
}

EXIT_CODES: dict[type[PricingInputError], int] = {
    InvalidMarketDataError: 2,
    InvalidContractError: 3,
    InvalidDateRangeError: 4,
    InvalidStepCountError: 5,
    ArbitrageConditionError: 6,
}


def exit_code_for(exc: Exception) -> int:
    """Map a pricing error kind to the CLI exit code (1 if unmapped)."""
    for error_cls, code in EXIT_CODES.items():
        if isinstance(exc, error_cls):
            return code
    return 1


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Price an American option on a CRR binomial lattice."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_run_mode_args(parser)

    parser.add_argument("--spot", type=float, default=None)
    parser.add_argument("--strike", type=float, default=None)
    parser.add_argument("--rate", type=float, default=None)
    parser.add_argument("--dividend-yield", type=float, default=None)
    parser.add_argument("--volatility", type=float, default=None)
    parser.add_argument(
        "--valuation-date",
        type=str,
        default=None,
        help="Valuation date (YYYY-MM-DD); defines t=0.",
    )
    parser.add_argument(
        "--maturity-date",
        type=str,
        default=None,
        help="Maturity date (YYYY-MM-DD).",
    )
    parser.add_argument(
        "--option-type",
        type=str,
        default=None,
        help="call/put (C/P accepted).",
    )
    parser.add_argument(
        "--steps",
        type=int,
        nargs="+",
        default=None,
        help="One or more lattice step counts.",
    )
    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    market: dict[str, Any] = {}
    contract: dict[str, Any] = {}

    if args.spot is not None:
        market["spot"] = args.spot
    if args.rate is not None:
        market["rate"] = args.rate
    if args.dividend_yield is not None:
        market["dividend_yield"] = args.dividend_yield
    if args.volatility is not None:
        market["volatility"] = args.volatility
    if args.valuation_date is not None:
        market["valuation_date"] = args.valuation_date
    if market:
        overrides["market"] = market

    if args.strike is not None:
        contract["strike"] = args.strike
    if args.maturity_date is not None:
        contract["maturity_date"] = args.maturity_date
    if args.option_type is not None:
        contract["option_type"] = args.option_type
    if contract:
        overrides["contract"] = contract

    if args.steps is not None:
        overrides["lattice"] = {"steps": args.steps}

    if args.dry_run:
        overrides["dry_run"] = True

    log_overrides = logging_overrides(args)
    if log_overrides:
        overrides["logging"] = log_overrides

    return overrides


def _build_inputs(
    config: dict[str, Any],
) -> tuple[MarketSnapshot, OptionContract, list[int]]:
    market_cfg = config_section(config, "market")
    contract_cfg = config_section(config, "contract")

    snapshot = MarketSnapshot(
        spot=market_cfg.get("spot"),
        volatility=market_cfg.get("volatility"),
        valuation_date=market_cfg.get("valuation_date"),
        rate=market_cfg.get("rate", 0.0),
        dividend_yield=market_cfg.get("dividend_yield", 0.0),
    )
    contract = OptionContract(
        option_type=contract_cfg.get("option_type", "put"),
        strike=contract_cfg.get("strike"),
        maturity_date=contract_cfg.get("maturity_date"),
    )
    contract.validate_against(snapshot)

    steps_grid = as_step_grid(config_section(config, "lattice").get("steps"))
    return snapshot, contract, steps_grid


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = build_config(DEFAULT_CONFIG, args.config, _build_overrides(args))
    if args.print_config:
        print(dumps(config, indent=2))
        return

    try:
        setup_logging_from_config(config_section(config, "logging"))
    except ValueError as exc:
        # No handlers yet; SystemExit prints the message to stderr, status 1.
        raise SystemExit(f"Invalid logging config: {exc}") from exc
    logger = logging.getLogger(__name__)

    try:
        snapshot, contract, steps_grid = _build_inputs(config)
    except ValueError as exc:
        logger.error("Invalid pricing input (%s): %s", type(exc).__name__, exc)
        raise SystemExit(exit_code_for(exc)) from exc

    logger.info("Valuation:  %s", snapshot.valuation_date)
    logger.info("Maturity:   %s", contract.maturity_date)
    logger.info(
        "Market:     spot=%s rate=%s q=%s vol=%s",
        snapshot.spot,
        snapshot.rate,
        snapshot.dividend_yield,
        snapshot.volatility,
    )
    logger.info("Contract:   %s K=%s", contract.option_type, contract.strike)
    logger.info("Steps:      %s", steps_grid)

    if config.get("dry_run", False):
        log_dry_run(
            logger,
            {
                "action": "price_american",
                "market": asdict(snapshot),
                "contract": asdict(contract),
                "steps": steps_grid,
            },
        )
        return

    engine = LatticeEngine()
    try:
        reports = engine.convergence(snapshot, contract, steps_grid)
    except PricingInputError as exc:
        logger.error("Pricing failed (%s): %s", type(exc).__name__, exc)
        raise SystemExit(exit_code_for(exc)) from exc

    for report in reports:
        logger.info(
            "steps=%d price=%.6f european=%.6f premium=%.6f",
            report.steps,
            report.price,
            report.european_price,
            report.early_exercise_premium,
        )
        print(dumps(report.to_dict()))


if __name__ == "__main__":
    main()
