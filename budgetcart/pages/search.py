"""Search results page: keyword search, price filter and pagination."""

from __future__ import annotations

from decimal import Decimal
from typing import Any
from urllib.parse import urljoin

from playwright.async_api import Error as PlaywrightError

from budgetcart import selectors
from budgetcart.collector import BoundedPaginatedCollector, Candidate, CollectionRequest
from budgetcart.dom_utils import human_wait, is_visible_safe, safe_get_attribute, text_content_safe
from budgetcart.logging_config import get_logger
from budgetcart.pages.base import BasePage
from budgetcart.pricing import parse_price

LOGGER = get_logger(__name__)


class SearchPage(BasePage):
    """Page Object for the keyword search and its result grid."""

    def __init__(self, page: Any, config: dict[str, Any] | None = None) -> None:
        super().__init__(page, config)
        self.search_box = page.locator(selectors.SEARCH_BOX).first
        self.search_button = page.locator(selectors.SEARCH_BUTTON).first
        self.max_price_input = page.locator(selectors.MAX_PRICE_INPUT).first
        self.price_submit_button = page.locator(selectors.PRICE_SUBMIT).first
        self.next_page_button = page.locator(selectors.NEXT_PAGE).first

    async def search_by_keyword(self, query: str) -> None:
        await self.search_box.fill(query, timeout=self.element_timeout)
        await self.search_button.click(timeout=self.element_timeout)
        await self.wait_for_page_load()
        LOGGER.info("Searched for: %s", query, extra={"query": query})

    async def apply_price_filter(self, max_price: Decimal) -> bool:
        """Fill the sidebar max-price box when the page offers one.

        Returns False when the filter is missing or rejected; results are
        still filtered by price while collecting.
        """

        try:
            if not await self.is_element_visible(selectors.MAX_PRICE_PROBE):
                LOGGER.info("Price filter not available on page - will filter manually")
                return False
            await self.max_price_input.fill(str(max_price), timeout=self.element_timeout)
            if not await self.is_element_visible(selectors.PRICE_SUBMIT_PROBE):
                return False
            await self.price_submit_button.click(timeout=self.element_timeout)
            await self.wait_for_page_load()
        except PlaywrightError as exc:
            LOGGER.info("Could not apply price filter - will filter manually (%s)", exc)
            return False
        LOGGER.info("Applied price filter: max %s", max_price)
        return True

    async def extract_candidates(self) -> list[Candidate]:
        """Read price and link from every result card on the current page."""

        await human_wait(1500, 2500)
        try:
            cards = self.page.locator(selectors.ITEM_CARD)
            total = await cards.count()
        except PlaywrightError as exc:
            LOGGER.warning("Result cards could not be read: %s", exc)
            return []

        candidates: list[Candidate] = []
        for index in range(total):
            card = cards.nth(index)
            price_text = await text_content_safe(card.locator(selectors.ITEM_PRICE).first)
            if not price_text:
                continue
            href = await safe_get_attribute(card.locator(selectors.ITEM_LINK).first, "href")
            if not href:
                continue
            price = parse_price(price_text)
            candidates.append(Candidate(price=price, identifier=urljoin(self.config["base_url"], href)))
            LOGGER.debug("Found item: %s - %s", price, href[:50])
        return candidates

    async def has_next_page(self) -> bool:
        locator = self.page.locator(selectors.NEXT_PAGE_PROBE).first
        if not await is_visible_safe(locator, timeout=3000):
            return False
        disabled = await safe_get_attribute(locator, "aria-disabled")
        return disabled != "true"

    async def go_to_next_page(self) -> bool:
        try:
            await self.next_page_button.click(timeout=self.element_timeout)
        except PlaywrightError as exc:
            LOGGER.info("Could not navigate to next page: %s", exc)
            return False
        await self.wait_for_page_load()
        LOGGER.info("Navigated to next page")
        return True

    async def search_items_by_name_under_price(
        self,
        query: str,
        max_price: Decimal,
        limit: int = 5,
    ) -> list[str]:
        """Search *query* and return up to *limit* item URLs priced at most *max_price*."""

        request = CollectionRequest(
            price_ceiling=max_price,
            target_count=limit,
            max_pages=int(self.config["pagination"]["max_pages"]),
        )
        await self.search_by_keyword(query)
        await self.apply_price_filter(request.price_ceiling)
        return await BoundedPaginatedCollector(SearchResultsSource(self)).collect(request)


class SearchResultsSource:
    """Adapts a SearchPage to the collector's page-source interface."""

    def __init__(self, search_page: SearchPage) -> None:
        self.search_page = search_page

    async def fetch_current_page_candidates(self) -> list[Candidate]:
        return await self.search_page.extract_candidates()

    async def advance_to_next_page(self) -> bool:
        if not await self.search_page.has_next_page():
            return False
        return await self.search_page.go_to_next_page()
