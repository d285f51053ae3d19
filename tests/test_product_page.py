import asyncio
import random
from decimal import Decimal

import pytest
from conftest import FakeElement, FakePage

from budgetcart import selectors
from budgetcart.errors import AddToCartError, CaptchaDetectedError
from budgetcart.pages.product import ProductPage


def test_check_for_captcha_raises_when_indicator_visible(config) -> None:
    page = FakePage({"#px-captcha": [FakeElement()]})
    with pytest.raises(CaptchaDetectedError):
        asyncio.run(ProductPage(page, config).check_for_captcha())


def test_hidden_captcha_markup_is_ignored(config) -> None:
    page = FakePage({"[class*='captcha']": [FakeElement(visible=False)]})
    asyncio.run(ProductPage(page, config).check_for_captcha())


def test_get_product_price(config) -> None:
    page = FakePage({selectors.PRODUCT_PRICE: [FakeElement("US $24.99/ea")]})
    assert asyncio.run(ProductPage(page, config).get_product_price()) == Decimal("24.99")
    assert asyncio.run(ProductPage(FakePage(), config).get_product_price()) == 0


def test_select_random_variants_skips_placeholders(config) -> None:
    sizes = [FakeElement("- Select -"), FakeElement("M"), FakeElement("L")]
    material = FakeElement(
        attrs={"id": "x-msku__select-box-1000"},
        children={"option": [FakeElement(attrs={"value": ""}), FakeElement(attrs={"value": "0"}), FakeElement(attrs={"value": "1"})]},
    )
    color_select = FakeElement(
        attrs={"id": "msku-color"},
        children={"option": [FakeElement(attrs={"value": "a"}), FakeElement(attrs={"value": "b"})]},
    )
    quantity = FakeElement()
    page = FakePage(
        {
            selectors.SIZE_DROPDOWN: [FakeElement("size:")],
            selectors.SIZE_OPTIONS: sizes,
            selectors.OTHER_VARIANT_SELECTS: [material, color_select],
            selectors.QUANTITY_SELECT: [quantity],
        }
    )

    asyncio.run(ProductPage(page, config, rng=random.Random(3)).select_random_variants())

    assert sizes[0].clicks == 0
    assert sizes[1].clicks + sizes[2].clicks == 1
    assert material.selected in {"0", "1"}
    assert color_select.selected is None
    assert quantity.selected == "1"


def test_add_to_cart_without_button_raises(config) -> None:
    with pytest.raises(AddToCartError):
        asyncio.run(ProductPage(FakePage(), config).add_to_cart())


def test_add_to_cart_clicks_button(config) -> None:
    button = FakeElement("Add to cart")
    page = FakePage({selectors.ADD_TO_CART: [button]})
    asyncio.run(ProductPage(page, config).add_to_cart())
    assert button.clicks == 1


def _stub_product_page(config, outcomes: dict[str, Exception | None]) -> ProductPage:
    page = FakePage({selectors.PRODUCT_PRICE: [FakeElement("$12.00")]})
    product = ProductPage(page, config)
    current = {}

    async def _goto(url):
        current["url"] = url

    async def _select():
        return None

    async def _add():
        error = outcomes[current["url"]]
        if error is not None:
            raise error

    product.goto = _goto
    product.select_random_variants = _select
    product.add_to_cart = _add
    return product


def test_add_items_to_cart_continues_after_single_failure(config) -> None:
    product = _stub_product_page(
        config,
        {"u1": None, "u2": AddToCartError(url="u2"), "u3": None},
    )

    summary = asyncio.run(product.add_items_to_cart(["u1", "u2", "u3"]))

    assert (summary.attempted, summary.added, summary.failed) == (3, 2, 1)
    assert summary.prices == {"u1": Decimal("12.00"), "u2": Decimal("12.00"), "u3": Decimal("12.00")}
    assert len(product.page.screenshots) == 3


def test_add_items_to_cart_fails_when_nothing_added(config) -> None:
    product = _stub_product_page(config, {"u1": RuntimeError("boom"), "u2": RuntimeError("boom")})
    with pytest.raises(AddToCartError, match="0/2"):
        asyncio.run(product.add_items_to_cart(["u1", "u2"]))


def test_add_items_to_cart_stops_on_captcha(config) -> None:
    product = _stub_product_page(config, {"u1": CaptchaDetectedError(), "u2": None})
    with pytest.raises(CaptchaDetectedError):
        asyncio.run(product.add_items_to_cart(["u1", "u2"]))
    assert len(product.page.screenshots) == 1
    assert "item_1_error_" in product.page.screenshots[0]
