import asyncio
from pathlib import Path

import pytest
from conftest import FakeElement, FakePage
from tenacity import wait_none

from budgetcart.errors import PageLoadError
from budgetcart.pages.base import BasePage


def _base_page(page: FakePage, config) -> BasePage:
    base = BasePage(page, config)
    base.goto_wait = wait_none()
    return base


def test_goto_retries_transient_failures(config) -> None:
    page = FakePage()
    page.goto_failures = 2

    asyncio.run(_base_page(page, config).goto("https://www.ebay.com/itm/1"))

    assert page.visited == ["https://www.ebay.com/itm/1"]
    assert page.goto_failures == 0


def test_goto_raises_page_load_error_after_three_attempts(config) -> None:
    page = FakePage()
    page.goto_failures = 3

    with pytest.raises(PageLoadError) as excinfo:
        asyncio.run(_base_page(page, config).goto("/itm/1"))

    assert excinfo.value.url == "https://www.ebay.com/itm/1"
    assert page.visited == []


def test_resolve_url_keeps_absolute_urls(config) -> None:
    base = BasePage(FakePage(), config)
    assert base.resolve_url("https://example.com/x") == "https://example.com/x"
    assert base.resolve_url("/sch/i.html") == "https://www.ebay.com/sch/i.html"


def test_take_screenshot_writes_under_configured_dir(config) -> None:
    page = FakePage()
    path = asyncio.run(BasePage(page, config).take_screenshot("cart_validation"))

    assert path is not None
    assert path.parent == Path(config["screenshots"]["path"])
    assert path.name.startswith("cart_validation_")
    assert page.screenshots == [str(path)]


def test_is_element_visible(config) -> None:
    page = FakePage({"#shown": [FakeElement()], "#hidden": [FakeElement(visible=False)]})
    base = BasePage(page, config)
    assert asyncio.run(base.is_element_visible("#shown")) is True
    assert asyncio.run(base.is_element_visible("#hidden")) is False
    assert asyncio.run(base.is_element_visible("#absent")) is False
