import asyncio

import pytest
from conftest import FakeElement, FakePage
from playwright.async_api import Error as PlaywrightError

from budgetcart import selectors
from budgetcart.pages.login import LoginPage


def test_login_without_credentials_opens_home_page(config) -> None:
    page = FakePage()
    asyncio.run(LoginPage(page, config).login())
    assert page.visited == [config["base_url"]]


def test_login_with_credentials_two_step_form(config) -> None:
    username, password, proceed, submit = FakeElement(), FakeElement(), FakeElement("Continue"), FakeElement("Sign in")
    page = FakePage(
        {
            selectors.LOGIN_USERNAME: [username],
            selectors.LOGIN_CONTINUE: [proceed],
            selectors.LOGIN_PASSWORD: [password],
            selectors.LOGIN_SUBMIT: [submit],
        }
    )

    asyncio.run(LoginPage(page, config).login("shopper", "hunter2"))

    assert page.visited == [config["signin_url"]]
    assert (username.value, password.value) == ("shopper", "hunter2")
    assert proceed.clicks == 1
    assert submit.clicks == 1


def test_login_single_step_form_skips_continue(config) -> None:
    submit = FakeElement("Sign in")
    page = FakePage(
        {
            selectors.LOGIN_USERNAME: [FakeElement()],
            selectors.LOGIN_PASSWORD: [FakeElement()],
            selectors.LOGIN_SUBMIT: [submit],
        }
    )
    asyncio.run(LoginPage(page, config).login("shopper", "hunter2"))
    assert submit.clicks == 1


def test_login_form_missing_propagates(config) -> None:
    with pytest.raises(PlaywrightError):
        asyncio.run(LoginPage(FakePage(), config).login("shopper", "hunter2"))
