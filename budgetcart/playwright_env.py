"""Centralised helpers for Playwright launch configuration."""

from __future__ import annotations

import os
import shlex
from functools import lru_cache
from typing import Any
from urllib.parse import urlparse

from playwright.async_api import Browser, Playwright

from budgetcart.logging_config import get_logger

LOGGER = get_logger(__name__)

_FALSE_VALUES = {"0", "false", "no", "off"}


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in _FALSE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def headless_enabled() -> bool:
    """Return True if Playwright should run in headless mode."""

    return _as_bool(os.getenv("BUDGETCART_HEADLESS"), True)


def stealth_enabled() -> bool:
    """Return True when stealth evasion scripts should be applied."""

    return _as_bool(os.getenv("BUDGETCART_STEALTH"), True)


@lru_cache(maxsize=1)
def _stealth_instance():
    from playwright_stealth import Stealth

    lang_env = os.getenv("BUDGETCART_LANGS") or "en-US,en"
    langs = tuple(
        entry.strip()
        for entry in lang_env.split(",")
        if entry.strip()
    ) or ("en-US", "en")

    return Stealth(
        navigator_languages_override=langs[:2],
        navigator_user_agent_override=os.getenv("USER_AGENT"),
    )


def apply_stealth(playwright: Playwright) -> None:
    """Hook the provided Playwright object with stealth evasions when enabled."""

    if not stealth_enabled():
        return
    _stealth_instance().hook_playwright_context(playwright)


def _proxy_config() -> dict[str, str] | None:
    raw = os.getenv("BUDGETCART_PROXY")
    if not raw:
        return None
    parsed = urlparse(raw)
    if not parsed.scheme:
        return {"server": f"http://{raw}"}
    return {"server": raw}


def slow_mo_ms() -> int | None:
    value = _env_int("BUDGETCART_SLOW_MO_MS", 0)
    return value if value > 0 else None


def launch_kwargs(*, headless: bool | None = None) -> dict[str, Any]:
    """Return kwargs passed to chromium.launch."""

    args = [
        "--disable-blink-features=AutomationControlled",
        "--disable-dev-shm-usage",
        "--disable-infobars",
        "--lang=en-US",
        "--no-default-browser-check",
        "--window-size=1440,960",
    ]
    extra_args = os.getenv("BUDGETCART_CHROMIUM_ARGS")
    if extra_args:
        args.extend(shlex.split(extra_args))

    kwargs: dict[str, Any] = {
        "headless": headless_enabled() if headless is None else headless,
        "args": args,
    }

    channel = os.getenv("BUDGETCART_BROWSER_CHANNEL")
    if channel:
        kwargs["channel"] = channel

    proxy = _proxy_config()
    if proxy:
        kwargs["proxy"] = proxy

    slow_mo = slow_mo_ms()
    if slow_mo:
        kwargs["slow_mo"] = slow_mo

    return kwargs


def context_kwargs() -> dict[str, Any]:
    """Return kwargs passed to browser.new_context."""

    kwargs: dict[str, Any] = {
        "viewport": {"width": 1440, "height": 900},
        "locale": "en-US",
    }
    user_agent = (os.getenv("USER_AGENT") or "").strip()
    if user_agent:
        kwargs["user_agent"] = user_agent
    return kwargs


async def launch_browser(playwright: Playwright, *, headless: bool | None = None) -> Browser:
    """Launch Chromium according to env overrides."""

    kwargs = launch_kwargs(headless=headless)
    LOGGER.debug("Launching chromium", extra={"headless": kwargs["headless"]})
    return await playwright.chromium.launch(**kwargs)


async def close_browser(browser: Browser | None) -> None:
    """Close the provided browser, logging instead of raising."""

    if browser is None:
        return
    try:
        await browser.close()
    except Exception as exc:
        LOGGER.warning("Failed to close browser: %s", exc)


def apply_wait_policy(min_ms: int, max_ms: int) -> tuple[int, int]:
    """Apply global wait overrides + multiplier for human_wait() calls."""

    min_override = _env_int("BUDGETCART_WAIT_MIN_MS", min_ms)
    max_override = _env_int("BUDGETCART_WAIT_MAX_MS", max_ms)
    multiplier = max(_env_float("BUDGETCART_WAIT_MULTIPLIER", 1.0), 0.0)

    scaled_min = int(min_override * multiplier)
    scaled_max = int(max_override * multiplier)
    if scaled_max < scaled_min:
        scaled_max = scaled_min
    return scaled_min, scaled_max
