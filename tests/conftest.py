"""In-memory stand-ins for Playwright pages and locators."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Callable

import pytest
from playwright.async_api import Error as PlaywrightError

from budgetcart.config import DEFAULT_CONFIG


class FakeElement:
    def __init__(
        self,
        text: str = "",
        *,
        attrs: dict[str, str] | None = None,
        visible: bool = True,
        children: dict[str, list["FakeElement"]] | None = None,
        on_click: Callable[[], None] | None = None,
    ) -> None:
        self.text = text
        self.attrs = attrs or {}
        self.visible = visible
        self.children = children or {}
        self.on_click = on_click
        self.clicks = 0
        self.value: str | None = None
        self.selected: str | None = None


class FakeLocator:
    def __init__(self, resolve: Callable[[], list[FakeElement]]) -> None:
        self._resolve = resolve

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(lambda: self._resolve()[:1])

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(lambda: self._resolve()[index : index + 1])

    def locator(self, selector: str) -> "FakeLocator":
        def _children() -> list[FakeElement]:
            parents = self._resolve()[:1]
            return [child for parent in parents for child in parent.children.get(selector, [])]

        return FakeLocator(_children)

    def _one(self) -> FakeElement:
        elements = self._resolve()
        if not elements:
            raise PlaywrightError("Timeout exceeded: element not found")
        return elements[0]

    async def count(self) -> int:
        return len(self._resolve())

    async def all(self) -> list["FakeLocator"]:
        return [FakeLocator(lambda element=element: [element]) for element in self._resolve()]

    async def wait_for(self, state: str = "visible", timeout: int | None = None) -> None:
        element = self._one()
        if state == "visible" and not element.visible:
            raise PlaywrightError("Timeout exceeded: element not visible")

    async def click(self, timeout: int | None = None) -> None:
        element = self._one()
        if not element.visible:
            raise PlaywrightError("Timeout exceeded: element not visible")
        element.clicks += 1
        if element.on_click is not None:
            element.on_click()

    async def fill(self, value: str, timeout: int | None = None) -> None:
        self._one().value = value

    async def text_content(self, timeout: int | None = None) -> str:
        return self._one().text

    async def inner_text(self, timeout: int | None = None) -> str:
        return self._one().text

    async def get_attribute(self, name: str, timeout: int | None = None) -> str | None:
        return self._one().attrs.get(name)

    async def select_option(self, value: str, timeout: int | None = None) -> list[str]:
        self._one().selected = value
        return [value]

    async def all_text_contents(self) -> list[str]:
        return [element.text for element in self._resolve()]


class FakePage:
    def __init__(self, elements: dict[str, Any] | None = None, url: str = "https://www.ebay.com/") -> None:
        self.elements = elements or {}
        self.url = url
        self.visited: list[str] = []
        self.screenshots: list[str] = []
        self.goto_failures = 0

    def _lookup(self, selector: str) -> list[FakeElement]:
        value = self.elements.get(selector, [])
        return value() if callable(value) else value

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(lambda: self._lookup(selector))

    async def goto(self, url: str, timeout: int | None = None, wait_until: str | None = None) -> None:
        if self.goto_failures:
            self.goto_failures -= 1
            raise PlaywrightError("net::ERR_CONNECTION_RESET")
        self.visited.append(url)
        self.url = url

    async def wait_for_load_state(self, state: str = "load", timeout: int | None = None) -> None:
        return None

    async def click(self, selector: str, timeout: int | None = None) -> None:
        await self.locator(selector).first.click(timeout=timeout)

    async def screenshot(self, path: str, full_page: bool = False) -> None:
        self.screenshots.append(path)


@pytest.fixture(autouse=True)
def _no_human_waits(monkeypatch) -> None:
    monkeypatch.setenv("BUDGETCART_WAIT_MULTIPLIER", "0")


@pytest.fixture()
def config(tmp_path) -> dict[str, Any]:
    data = deepcopy(DEFAULT_CONFIG)
    data["screenshots"]["path"] = str(tmp_path / "screenshots")
    data["report"]["path"] = str(tmp_path / "report.jsonl")
    return data
