"""Sign-in page: guest mode by default, credentials when supplied."""

from __future__ import annotations

from budgetcart import selectors
from budgetcart.logging_config import get_logger
from budgetcart.pages.base import BasePage

LOGGER = get_logger(__name__)


class LoginPage(BasePage):
    async def login(self, username: str | None = None, password: str | None = None) -> None:
        if not username or not password:
            LOGGER.info("No credentials provided - proceeding as guest")
            await self.goto(self.config["base_url"])
            await self.wait_for_page_load()
            return

        await self.goto(self.config["signin_url"])
        await self.page.locator(selectors.LOGIN_USERNAME).fill(username, timeout=self.element_timeout)
        # eBay splits sign-in into two steps when the continue button is shown.
        if await self.is_element_visible(selectors.LOGIN_CONTINUE, timeout=2000):
            await self.click_element(selectors.LOGIN_CONTINUE)
        await self.page.locator(selectors.LOGIN_PASSWORD).fill(password, timeout=self.element_timeout)
        await self.click_element(selectors.LOGIN_SUBMIT)
        await self.wait_for_page_load()
        LOGGER.info("Signed in as %s", username)
