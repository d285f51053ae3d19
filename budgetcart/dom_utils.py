"""Helper utilities for safely interacting with page content."""

from __future__ import annotations

import asyncio
import random
from typing import Any, Awaitable, Callable, Iterable, TypeVar

from playwright.async_api import Error as PlaywrightError

from budgetcart.logging_config import get_logger
from budgetcart.playwright_env import apply_wait_policy

LOGGER = get_logger(__name__)

T = TypeVar("T")

# Playwright's TimeoutError subclasses Error; locator misuse surfaces as ValueError.
_HANDLEABLE_ERRORS: tuple[type[BaseException], ...] = (PlaywrightError, ValueError)


async def human_wait(
    min_ms: int = 350,
    max_ms: int = 900,
    *,
    obey_policy: bool = True,
) -> None:
    """Sleep for a random, human-like interval between the provided bounds."""

    if min_ms < 0:
        min_ms = 0
    if max_ms < min_ms:
        max_ms = min_ms

    if obey_policy:
        min_ms, max_ms = apply_wait_policy(min_ms, max_ms)

    if max_ms <= 0:
        return
    delay = random.uniform(min_ms / 1000, max_ms / 1000)
    await asyncio.sleep(delay)


async def inner_text_safe(locator: Any, timeout: int = 3000) -> str | None:
    """Return the stripped inner text for *locator* while ignoring DOM failures."""

    if locator is None:
        return None

    try:
        result = await locator.inner_text(timeout=timeout)
    except _HANDLEABLE_ERRORS:
        return None

    if result is None:
        return None

    return result.strip()


async def text_content_safe(locator: Any, timeout: int = 3000) -> str | None:
    if locator is None:
        return None
    try:
        result = await locator.text_content(timeout=timeout)
    except _HANDLEABLE_ERRORS:
        return None
    if result is None:
        return None
    trimmed = result.strip()
    return trimmed or None


async def safe_get_attribute(locator: Any, attribute: str, timeout: int = 3000) -> str | None:
    if locator is None:
        return None
    try:
        value = await locator.get_attribute(attribute, timeout=timeout)
    except _HANDLEABLE_ERRORS:
        return None
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


async def is_visible_safe(locator: Any, timeout: int = 2000) -> bool:
    """Wait up to *timeout* ms for *locator* to become visible; False on any DOM failure."""

    if locator is None:
        return False
    try:
        await locator.wait_for(state="visible", timeout=timeout)
    except _HANDLEABLE_ERRORS:
        return False
    return True


async def first_successful(
    strategies: Iterable[Callable[[], Awaitable[T | None]]],
    *,
    label: str = "value",
) -> T | None:
    """Run *strategies* in priority order and return the first non-None result.

    A strategy that raises a Playwright error is skipped like one that found
    nothing, so a list of selector lookups degrades to the next candidate.
    """

    for index, strategy in enumerate(strategies, start=1):
        try:
            result = await strategy()
        except _HANDLEABLE_ERRORS as exc:
            LOGGER.debug("Strategy %d for %s failed: %s", index, label, exc)
            continue
        if result is not None:
            LOGGER.debug("Strategy %d resolved %s", index, label)
            return result
    return None
