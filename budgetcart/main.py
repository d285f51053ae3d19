"""Command-line interface entry point for the budgetcart harness."""

from __future__ import annotations

import argparse
import asyncio
import re
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable

from dotenv import load_dotenv
from pydantic import ValidationError

from budgetcart.config import DEFAULT_CONFIG_PATH, DEFAULT_SCENARIOS_PATH, load_config, load_scenarios
from budgetcart.errors import ConfigurationError
from budgetcart.flow import run_scenarios
from budgetcart.logging_config import get_logger, reconfigure_loggers
from budgetcart.report import ping_healthcheck, summarize
from budgetcart.schemas import Scenario

LOGGER = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def _decimal_arg(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the harness."""

    parser = argparse.ArgumentParser(
        description="Search a shop, add affordable items to the cart and check the total stays in budget."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help="YAML file merged over the built-in configuration.",
    )
    parser.add_argument(
        "--scenarios",
        dest="scenarios_path",
        type=Path,
        default=DEFAULT_SCENARIOS_PATH,
        help="YAML file with the scenarios to run.",
    )
    parser.add_argument(
        "--scenario",
        dest="scenario_filter",
        type=str,
        help="Regex/substring filter applied to scenario names (case-insensitive).",
    )
    parser.add_argument("--query", type=str, help="Run a single ad-hoc scenario for this keyword.")
    parser.add_argument(
        "--max-price",
        type=_decimal_arg,
        help="Per-item price ceiling for the ad-hoc scenario.",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=5,
        help="Number of items to collect for the ad-hoc scenario (default: 5).",
    )
    parser.add_argument(
        "--max-pages",
        type=int,
        help="Override pagination.max_pages from the configuration.",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless.",
    )
    parser.add_argument(
        "--list",
        dest="list_only",
        action="store_true",
        help="Print the selected scenarios and exit.",
    )

    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.query and args.max_price is None:
        parser.error("--query requires --max-price")
    if args.max_price is not None and not args.query:
        parser.error("--max-price requires --query")
    if args.max_pages is not None and args.max_pages < 1:
        parser.error("--max-pages must be a positive integer")

    pattern_text = (args.scenario_filter or "").strip()
    if pattern_text:
        try:
            args.scenario_pattern = re.compile(pattern_text, re.IGNORECASE)
        except re.error as exc:
            parser.error(f"Invalid --scenario pattern: {exc}")
    else:
        args.scenario_pattern = None
    return args


def select_scenarios(args: argparse.Namespace) -> list[Scenario]:
    """Return the ad-hoc scenario from the CLI or the filtered scenario file."""

    if args.query:
        try:
            return [
                Scenario(
                    name=f"ad-hoc: {args.query}",
                    query=args.query,
                    max_price=args.max_price,
                    limit=args.limit,
                )
            ]
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid ad-hoc scenario: {exc}", query=args.query) from exc

    scenarios = load_scenarios(args.scenarios_path)
    pattern = args.scenario_pattern
    if pattern is not None:
        scenarios = [scenario for scenario in scenarios if pattern.search(scenario.name)]
    if not scenarios:
        raise ConfigurationError("No scenarios matched the provided filter.")
    return scenarios


async def _async_main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    load_dotenv()
    reconfigure_loggers()

    config = load_config(args.config)
    if args.max_pages is not None:
        config["pagination"]["max_pages"] = args.max_pages
    scenarios = select_scenarios(args)

    if args.list_only:
        for scenario in scenarios:
            print(f"{scenario.name}: {scenario.query!r} <= {scenario.max_price} x{scenario.limit}")
        return EXIT_OK

    LOGGER.info("Running %d scenario(s)", len(scenarios))
    results = await run_scenarios(scenarios, config, headless=False if args.headed else None)
    print(summarize(results, config["currency"]["symbol"]))

    if all(result.passed for result in results):
        ping_healthcheck(config, results)
        return EXIT_OK
    return EXIT_FAILED


def main(argv: Iterable[str] | None = None) -> None:
    try:
        code = asyncio.run(_async_main(argv))
    except ConfigurationError as exc:
        LOGGER.error("Configuration error: %s", exc)
        raise SystemExit(EXIT_CONFIG) from exc
    except KeyboardInterrupt:  # pragma: no cover - interactive safety
        LOGGER.info("Interrupted by user")
        raise SystemExit(EXIT_FAILED)
    raise SystemExit(code)


if __name__ == "__main__":
    main()
