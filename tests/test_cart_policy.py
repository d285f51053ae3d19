from decimal import Decimal

import pytest

from budgetcart.cart_policy import count_tolerance, evaluate_cart
from budgetcart.errors import CartValidationError


def test_total_within_budget_passes() -> None:
    check = evaluate_cart(Decimal("180.50"), 2, Decimal("100"), 2)
    assert check.threshold == Decimal("200")
    assert check.exact_match is True
    assert check.difference == 0


def test_total_equal_to_threshold_passes() -> None:
    check = evaluate_cart(Decimal("300"), 3, Decimal("100"), 3)
    assert check.total == check.threshold


def test_total_over_budget_fails() -> None:
    with pytest.raises(CartValidationError, match="exceeds budget"):
        evaluate_cart(Decimal("200.01"), 2, Decimal("100"), 2)


def test_no_expected_items_requires_empty_cart() -> None:
    check = evaluate_cart(Decimal("0"), 0, Decimal("50"), 0)
    assert check.threshold == 0

    with pytest.raises(CartValidationError):
        evaluate_cart(Decimal("12"), 1, Decimal("50"), 0)


def test_empty_cart_when_items_expected_fails() -> None:
    with pytest.raises(CartValidationError, match="Cart is empty"):
        evaluate_cart(Decimal("0"), 0, Decimal("50"), 3)


def test_zero_total_with_items_is_suspicious() -> None:
    with pytest.raises(CartValidationError, match="suspicious"):
        evaluate_cart(Decimal("0"), 2, Decimal("50"), 2)


def test_count_tolerance_depends_on_expected_count() -> None:
    assert count_tolerance(1) == 0
    assert count_tolerance(2) == 0
    assert count_tolerance(3) == 1
    assert count_tolerance(8) == 1


def test_off_by_one_allowed_for_larger_carts() -> None:
    check = evaluate_cart(Decimal("40"), 4, Decimal("20"), 5)
    assert check.exact_match is False
    assert check.difference == 1


def test_off_by_one_rejected_for_small_carts() -> None:
    with pytest.raises(CartValidationError, match="exceeds tolerance"):
        evaluate_cart(Decimal("10"), 1, Decimal("20"), 2)


def test_off_by_two_rejected() -> None:
    with pytest.raises(CartValidationError):
        evaluate_cart(Decimal("40"), 3, Decimal("20"), 5)


def test_cart_validation_error_is_an_assertion() -> None:
    with pytest.raises(AssertionError):
        evaluate_cart(Decimal("999"), 1, Decimal("1"), 1)
