"""End-to-end shopping flow: search, add to cart, validate the cart total."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from playwright.async_api import async_playwright

from budgetcart.errors import HarnessError
from budgetcart.logging_config import get_logger
from budgetcart.pages.cart import CartPage
from budgetcart.pages.login import LoginPage
from budgetcart.pages.product import ProductPage
from budgetcart.pages.search import SearchPage
from budgetcart.playwright_env import apply_stealth, close_browser, context_kwargs, launch_browser
from budgetcart.report import append_result
from budgetcart.schemas import Scenario, ScenarioResult

LOGGER = get_logger(__name__)


class NoItemsFoundError(HarnessError):
    """Raised when a search yields nothing within budget."""

    default_message = "No items found within budget."


async def run_scenario(
    page: Any,
    scenario: Scenario,
    config: dict[str, Any],
    *,
    result: ScenarioResult | None = None,
    username: str | None = None,
    password: str | None = None,
) -> ScenarioResult:
    """Run one scenario on *page*, filling *result* as each step completes.

    Failures propagate; *result* keeps whatever the earlier steps recorded.
    """

    result = result or ScenarioResult.for_scenario(scenario)
    LOGGER.info(
        "TEST: %s | query=%r max_price=%s limit=%d",
        scenario.name,
        scenario.query,
        scenario.max_price,
        scenario.limit,
        extra={"query": scenario.query},
    )

    await LoginPage(page, config).login(username, password)

    LOGGER.info("STEP 1: Searching for items...")
    urls = await SearchPage(page, config).search_items_by_name_under_price(
        scenario.query,
        scenario.max_price,
        scenario.limit,
    )
    result.urls = urls
    LOGGER.info("Found %d items within budget", len(urls))
    for number, url in enumerate(urls, start=1):
        LOGGER.info("  %d. %s", number, url[:80])
    if not urls:
        raise NoItemsFoundError(query=scenario.query)

    LOGGER.info("STEP 2: Adding items to cart...")
    summary = await ProductPage(page, config).add_items_to_cart(urls)
    result.added = summary.added
    result.failed = summary.failed

    LOGGER.info("STEP 3: Validating cart total...")
    check = await CartPage(page, config).assert_cart_total_not_exceeds(scenario.max_price, len(urls))
    result.cart_total = check.total
    result.cart_count = check.cart_count
    result.passed = True
    LOGGER.info("Test passed: %s", scenario.name)
    return result


async def run_scenarios(
    scenarios: Iterable[Scenario],
    config: dict[str, Any],
    *,
    headless: bool | None = None,
) -> list[ScenarioResult]:
    """Run each scenario in a fresh browser context and record every outcome."""

    username = os.getenv("BUDGETCART_USERNAME") or None
    password = os.getenv("BUDGETCART_PASSWORD") or None
    report_path = Path(config.get("report", {}).get("path") or "test-results/report.jsonl")
    results: list[ScenarioResult] = []

    async with async_playwright() as playwright:
        apply_stealth(playwright)
        browser = await launch_browser(playwright, headless=headless)
        try:
            for scenario in scenarios:
                result = ScenarioResult.for_scenario(scenario)
                context = await browser.new_context(**context_kwargs())
                context.set_default_timeout(int(config["timeout"]["default"]))
                try:
                    page = await context.new_page()
                    await run_scenario(
                        page,
                        scenario,
                        config,
                        result=result,
                        username=username,
                        password=password,
                    )
                except Exception as exc:
                    result.passed = False
                    result.error = str(exc)
                    LOGGER.exception("Scenario %s failed", scenario.name)
                finally:
                    result.finished_at = datetime.now(timezone.utc)
                    try:
                        await context.close()
                    except Exception as exc:
                        LOGGER.warning("Failed to close context: %s", exc)
                results.append(result)
                append_result(report_path, result)
        finally:
            await close_browser(browser)
            LOGGER.info("Resource cleanup complete")

    return results
