"""Product page: random variant selection and add-to-cart."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from playwright.async_api import Error as PlaywrightError

from budgetcart import selectors
from budgetcart.dom_utils import human_wait, is_visible_safe, safe_get_attribute, text_content_safe
from budgetcart.errors import AddToCartError, CaptchaDetectedError
from budgetcart.logging_config import get_logger
from budgetcart.pages.base import BasePage
from budgetcart.pricing import ZERO, parse_price
from budgetcart.randomizer import random_element

LOGGER = get_logger(__name__)


@dataclass
class AddToCartSummary:
    attempted: int = 0
    added: int = 0
    failed: int = 0
    prices: dict[str, Decimal] = field(default_factory=dict)


class ProductPage(BasePage):
    """Page Object for a single listing."""

    def __init__(
        self,
        page: Any,
        config: dict[str, Any] | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(page, config)
        self.rng = rng
        self.add_to_cart_button = page.locator(selectors.ADD_TO_CART).first
        self.quantity_select = page.locator(selectors.QUANTITY_SELECT).first
        self.price_element = page.locator(selectors.PRODUCT_PRICE).first

    async def check_for_captcha(self) -> None:
        for selector in selectors.CAPTCHA_INDICATORS:
            if await is_visible_safe(self.page.locator(selector).first, timeout=1000):
                raise CaptchaDetectedError(url=self.page.url)

    async def get_product_price(self) -> Decimal:
        text = await text_content_safe(self.price_element)
        if text is None:
            LOGGER.info("Could not get product price")
            return ZERO
        return parse_price(text)

    async def select_random_variants(self) -> None:
        """Pick a random size, color and any other variant the listing asks for."""

        LOGGER.info("Checking for product variants...")
        await self.check_for_captcha()

        await self._select_dropdown_variant("size", selectors.SIZE_DROPDOWN, selectors.SIZE_OPTIONS)
        await self._select_dropdown_variant("color", selectors.COLOR_DROPDOWN, selectors.COLOR_OPTIONS)
        await self._select_other_variants()
        await self._select_quantity()

        await human_wait(800, 1200)
        LOGGER.info("Variant selection completed")

    async def _select_dropdown_variant(self, label: str, button_selector: str, options_selector: str) -> str | None:
        button = self.page.locator(button_selector).first
        try:
            if not await is_visible_safe(button, timeout=2000):
                LOGGER.info("No %s variant found or already selected", label)
                return None
            await button.click(timeout=self.element_timeout)
            await human_wait(400, 600)

            # First option is the "Select" placeholder.
            options = (await self.page.locator(options_selector).all())[1:]
            choice = random_element(options, self.rng)
            if choice is None:
                LOGGER.info("No %s variant found or already selected", label)
                return None
            text = (await text_content_safe(choice)) or ""
            await choice.click(timeout=self.element_timeout)
        except PlaywrightError as exc:
            LOGGER.info("No %s variant found or already selected (%s)", label, exc)
            return None
        LOGGER.info("Selected %s: %s", label, text)
        return text

    async def _select_other_variants(self) -> list[str]:
        chosen: list[str] = []
        try:
            select_boxes = await self.page.locator(selectors.OTHER_VARIANT_SELECTS).all()
        except PlaywrightError:
            LOGGER.info("No other variants to select")
            return chosen

        for select in select_boxes:
            select_id = (await safe_get_attribute(select, "id") or "").lower()
            if any(handled in select_id for handled in selectors.HANDLED_VARIANT_IDS):
                continue
            if not await is_visible_safe(select, timeout=1000):
                continue
            try:
                values = [
                    value
                    for value in [
                        await safe_get_attribute(option, "value")
                        for option in await select.locator("option").all()
                    ]
                    if value
                ]
                # A single value is only the "Select" prompt.
                if len(values) <= 1:
                    continue
                value = random_element(values, self.rng)
                await select.select_option(value, timeout=self.element_timeout)
            except PlaywrightError as exc:
                LOGGER.info("Variant select %s skipped: %s", select_id or "?", exc)
                continue
            LOGGER.info("Selected variant: %s", value)
            chosen.append(value)
        return chosen

    async def _select_quantity(self) -> None:
        if not await is_visible_safe(self.quantity_select, timeout=2000):
            LOGGER.info("Quantity field not found - using default")
            return
        try:
            await self.quantity_select.select_option("1", timeout=self.element_timeout)
        except PlaywrightError:
            LOGGER.info("Quantity field not usable - using default")
            return
        LOGGER.info("Quantity set to 1")

    async def add_to_cart(self) -> None:
        try:
            await self.add_to_cart_button.wait_for(state="visible", timeout=5000)
            await self.add_to_cart_button.click(timeout=self.element_timeout)
        except PlaywrightError as exc:
            raise AddToCartError(f"Failed to add item to cart: {exc}", url=self.page.url) from exc
        await human_wait(1800, 2400)
        LOGGER.info("Item added to cart")

    async def add_items_to_cart(self, urls: list[str]) -> AddToCartSummary:
        """Open each URL, pick variants and add it to the cart.

        A CAPTCHA aborts the whole run. Any other per-item failure is logged,
        screenshotted and skipped; the run fails only when no item made it.
        """

        summary = AddToCartSummary(attempted=len(urls))
        LOGGER.info("Adding %d items to cart...", len(urls))

        for number, url in enumerate(urls, start=1):
            LOGGER.info("--- Processing item %d/%d ---", number, len(urls), extra={"url": url})
            try:
                await self.goto(url)
                await human_wait(1500, 2500)
                await self.check_for_captcha()

                price = await self.get_product_price()
                summary.prices[url] = price
                LOGGER.info("Product price: %s", price)

                await self.select_random_variants()
                await self.add_to_cart()
                await self.take_screenshot(f"item_{number}_added")
                summary.added += 1
            except CaptchaDetectedError:
                summary.failed += 1
                await self.take_screenshot(f"item_{number}_error")
                raise
            except Exception as exc:
                summary.failed += 1
                LOGGER.warning("Failed to add item %d, continuing with next item: %s", number, exc)
                await self.take_screenshot(f"item_{number}_error")

        LOGGER.info("Successfully added: %d/%d items", summary.added, len(urls))
        if summary.failed:
            LOGGER.warning("Failed to add: %d/%d items", summary.failed, len(urls))
        if urls and summary.failed == len(urls):
            raise AddToCartError(f"Failed to add any items to cart (0/{len(urls)})")
        return summary
