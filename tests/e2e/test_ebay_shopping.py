"""Live shopping runs against eBay. Opt in with BUDGETCART_LIVE=1."""

import asyncio
import os

import pytest

from budgetcart.config import load_config, load_scenarios
from budgetcart.flow import run_scenarios

pytestmark = [
    pytest.mark.live,
    pytest.mark.skipif(os.getenv("BUDGETCART_LIVE") != "1", reason="set BUDGETCART_LIVE=1 to hit the live site"),
]

SCENARIOS = load_scenarios()


@pytest.fixture(autouse=True)
def _no_human_waits() -> None:
    # Live runs keep the human-like pacing.
    return None


@pytest.mark.parametrize("scenario", SCENARIOS, ids=[scenario.name for scenario in SCENARIOS])
def test_cart_total_stays_within_budget(scenario, tmp_path) -> None:
    config = load_config()
    config["report"]["path"] = str(tmp_path / "report.jsonl")

    (result,) = asyncio.run(run_scenarios([scenario], config))

    assert result.passed, result.error
    assert result.cart_total <= scenario.max_price * len(result.urls)
