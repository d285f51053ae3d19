"""Cart page: totals, item counts and the budget assertion."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any

from playwright.async_api import Error as PlaywrightError

from budgetcart import selectors
from budgetcart.cart_policy import CartCheck, evaluate_cart
from budgetcart.dom_utils import first_successful, human_wait, is_visible_safe, text_content_safe
from budgetcart.logging_config import get_logger
from budgetcart.pages.base import BasePage
from budgetcart.pricing import ZERO, parse_price

LOGGER = get_logger(__name__)

_DIGITS = re.compile(r"\d+")


class CartPage(BasePage):
    """Page Object for the shopping cart."""

    def __init__(self, page: Any, config: dict[str, Any] | None = None) -> None:
        super().__init__(page, config)
        self.cart_icon = page.locator(selectors.CART_ICON).first

    async def open_cart(self) -> None:
        LOGGER.info("Opening shopping cart...")
        try:
            await self.cart_icon.click(timeout=5000)
            await self.wait_for_page_load()
            LOGGER.info("Cart opened via icon click")
        except PlaywrightError:
            LOGGER.info("Cart icon not found, navigating directly...")
            await self.goto(self.config["cart_url"])
            await self.wait_for_page_load()
            LOGGER.info("Cart opened via direct navigation")
        await human_wait(1800, 2200)

    async def clear_cart(self) -> int:
        """Remove every item one at a time; returns how many removals succeeded."""

        LOGGER.info("Clearing cart...")
        await self.open_cart()
        buttons = self.page.locator(selectors.REMOVE_BUTTONS)
        try:
            count = await buttons.count()
        except PlaywrightError as exc:
            LOGGER.warning("Could not clear cart: %s", exc)
            return 0
        if count == 0:
            LOGGER.info("Cart is already empty")
            return 0

        removed = 0
        for number in range(1, count + 1):
            # The list re-renders after each removal, so always take the first button.
            try:
                await buttons.first.click(timeout=5000)
            except PlaywrightError:
                LOGGER.info("Could not remove item %d", number)
                continue
            removed += 1
            await human_wait(800, 1200)
        LOGGER.info("Removed %d items from cart", removed)
        return removed

    async def _total_from(self, selector: str) -> Decimal | None:
        element = self.page.locator(selector).first
        if not await is_visible_safe(element, timeout=3000):
            return None
        total = parse_price(await text_content_safe(element))
        return total if total > 0 else None

    async def get_total_amount(self) -> Decimal:
        await human_wait(1800, 2200)
        strategies = [
            lambda selector=selector: self._total_from(selector) for selector in selectors.CART_TOTAL
        ]
        total = await first_successful(strategies, label="cart total")
        if total is not None:
            LOGGER.info("Found cart total: %s", total)
            return total
        return await self.calculate_total_from_items()

    async def calculate_total_from_items(self) -> Decimal:
        try:
            texts = await self.page.locator(selectors.CART_ITEM_PRICE).all_text_contents()
        except PlaywrightError as exc:
            LOGGER.warning("Error summing cart item prices: %s", exc)
            return ZERO
        total = sum((parse_price(text) for text in texts), ZERO)
        LOGGER.info("Calculated total from items: %s", total)
        return total

    async def _count_from(self, selector: str) -> int | None:
        element = self.page.locator(selector).first
        if not await is_visible_safe(element, timeout=2000):
            return None
        digits = "".join(_DIGITS.findall(await text_content_safe(element) or ""))
        return int(digits) if digits else None

    async def get_items_count(self) -> int:
        strategies = [
            lambda selector=selector: self._count_from(selector) for selector in selectors.CART_COUNT
        ]
        count = await first_successful(strategies, label="cart item count")
        if count is not None:
            LOGGER.info("Cart contains %d items", count)
            return count
        try:
            rows = await self.page.locator(selectors.CART_ITEM_ROWS).count()
        except PlaywrightError as exc:
            LOGGER.warning("Error getting items count: %s", exc)
            return 0
        LOGGER.info("Cart contains %d items (counted)", rows)
        return rows

    async def assert_cart_total_not_exceeds(self, budget_per_item: Decimal, items_count: int) -> CartCheck:
        """Open the cart and check its total against ``budget_per_item * items_count``."""

        LOGGER.info("--- Validating cart total ---")
        await self.open_cart()
        total = await self.get_total_amount()
        cart_count = await self.get_items_count()
        await self.take_screenshot("cart_final")
        return evaluate_cart(total, cart_count, budget_per_item, items_count)
