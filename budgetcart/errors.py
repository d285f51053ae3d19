"""Custom exception types for budgetcart."""

from __future__ import annotations

from typing import Optional


class HarnessError(Exception):
    """Base error carrying the URL/query/item context it was raised in."""

    default_message = "Shopping flow failed."

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        url: Optional[str] = None,
        query: Optional[str] = None,
        item: Optional[int] = None,
    ) -> None:
        self.message = message or self.default_message
        self.url = url
        self.query = query
        self.item = item
        super().__init__(self.message)

    def __str__(self) -> str:
        context_parts: list[str] = []
        if self.url:
            context_parts.append(f"url={self.url}")
        if self.query:
            context_parts.append(f"query={self.query}")
        if self.item is not None:
            context_parts.append(f"item={self.item}")
        context = ", ".join(context_parts)
        return f"{self.message} ({context})" if context else self.message


class ConfigurationError(HarnessError, ValueError):
    """Raised when a request, scenario or config value makes the run pointless."""

    default_message = "Invalid configuration."


class PageLoadError(HarnessError):
    """Raised when a page fails to load after retries."""

    default_message = "Failed to load page."


class CaptchaDetectedError(HarnessError):
    """Raised when the site serves a CAPTCHA or bot-detection wall."""

    default_message = "CAPTCHA/Bot detection encountered! Test cannot continue."


class AddToCartError(HarnessError):
    """Raised when an item (or every item) could not be added to the cart."""

    default_message = "Failed to add item to cart."


class CartValidationError(HarnessError, AssertionError):
    """Raised when the cart contents contradict the budget expectations."""

    default_message = "Cart validation failed."
