"""Budget and item-count rules applied to a cart after items were added."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from budgetcart.errors import CartValidationError
from budgetcart.logging_config import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class CartCheck:
    total: Decimal
    cart_count: int
    expected_count: int
    threshold: Decimal
    difference: int
    exact_match: bool


def count_tolerance(expected_count: int) -> int:
    """Allowed item-count drift: none for one or two items, one otherwise."""

    return 0 if expected_count <= 2 else 1


def evaluate_cart(
    total: Decimal,
    cart_count: int,
    budget_per_item: Decimal,
    expected_count: int,
) -> CartCheck:
    """Raise CartValidationError unless the cart matches what was added and fits the budget."""

    total = Decimal(str(total))
    threshold = Decimal(str(budget_per_item)) * expected_count
    difference = abs(cart_count - expected_count)
    check = CartCheck(
        total=total,
        cart_count=cart_count,
        expected_count=expected_count,
        threshold=threshold,
        difference=difference,
        exact_match=difference == 0,
    )
    LOGGER.info(
        "Budget threshold: %s x %d = %s (cart total %s, items %d)",
        budget_per_item,
        expected_count,
        threshold,
        total,
        cart_count,
    )

    if expected_count == 0:
        if cart_count != 0 or total != 0:
            raise CartValidationError(
                f"Expected an empty cart but found {cart_count} items totalling {total}"
            )
        LOGGER.info("No items were expected - empty cart is valid")
        return check

    if cart_count == 0:
        raise CartValidationError(f"Cart is empty! Expected {expected_count} items but found 0")

    if total == 0:
        raise CartValidationError(f"Cart total is 0 but contains {cart_count} items - suspicious!")

    if difference:
        message = f"Cart item mismatch: expected {expected_count} items but found {cart_count}"
        LOGGER.warning(message)
        if difference > count_tolerance(expected_count):
            raise CartValidationError(f"{message} - difference of {difference} items exceeds tolerance")

    if total > threshold:
        raise CartValidationError(f"Cart total {total} exceeds budget {threshold}")

    LOGGER.info("Assertion passed: %s <= %s", total, threshold)
    return check
