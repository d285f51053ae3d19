"""Shared Page Object behaviour: navigation, waits and screenshots."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any
from urllib.parse import urljoin

from playwright.async_api import Error as PlaywrightError
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from budgetcart.config import DEFAULT_CONFIG
from budgetcart.dom_utils import is_visible_safe
from budgetcart.errors import PageLoadError
from budgetcart.logging_config import get_logger

LOGGER = get_logger(__name__)


class BasePage:
    """Common helpers for every Page Object bound to one Playwright page."""

    def __init__(self, page: Any, config: dict[str, Any] | None = None) -> None:
        self.page = page
        self.config = config or DEFAULT_CONFIG
        timeouts = self.config.get("timeout", {})
        self.default_timeout = int(timeouts.get("default", 30000))
        self.navigation_timeout = int(timeouts.get("navigation", 60000))
        self.element_timeout = int(timeouts.get("element", 10000))
        self.screenshot_dir = Path(self.config.get("screenshots", {}).get("path", "test-results/screenshots"))
        self.goto_attempts = 3
        self.goto_wait = wait_random_exponential(multiplier=0.5, max=5)

    def resolve_url(self, url: str) -> str:
        if url.startswith("http"):
            return url
        return urljoin(self.config.get("base_url", ""), url)

    async def goto(self, url: str) -> None:
        """Navigate to *url*, retrying transient Playwright failures."""

        full_url = self.resolve_url(url)

        @retry(
            stop=stop_after_attempt(self.goto_attempts),
            wait=self.goto_wait,
            retry=retry_if_exception_type(PlaywrightError),
        )
        async def _navigate() -> None:
            await self.page.goto(
                full_url,
                timeout=self.navigation_timeout,
                wait_until="domcontentloaded",
            )

        try:
            await _navigate()
        except RetryError as exc:
            raise PageLoadError(url=full_url) from exc.last_attempt.exception()

    async def click_element(self, selector: str) -> None:
        await self.page.click(selector, timeout=self.element_timeout)

    async def wait_for_page_load(self) -> None:
        """Wait for the load event; slow third-party assets are not fatal."""

        try:
            await self.page.wait_for_load_state("load", timeout=self.navigation_timeout)
        except PlaywrightError as exc:
            LOGGER.debug("Load state not reached: %s", exc)

    async def is_element_visible(self, selector: str, timeout: int = 3000) -> bool:
        return await is_visible_safe(self.page.locator(selector).first, timeout=timeout)

    async def take_screenshot(self, name: str) -> Path | None:
        """Save a full-page screenshot as ``<name>_<timestamp>.png``."""

        timestamp = datetime.now().strftime("%Y-%m-%dT%H-%M-%S-%f")
        path = self.screenshot_dir / f"{name}_{timestamp}.png"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            await self.page.screenshot(path=str(path), full_page=True)
        except (OSError, PlaywrightError) as exc:
            LOGGER.warning("Screenshot %s failed: %s", name, exc)
            return None
        LOGGER.info("Screenshot saved: %s", path.name)
        return path
