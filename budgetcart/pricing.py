"""Helpers for turning scraped price strings into decimals."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

# "US $1,234.56", "$10.00 to $20.00": the first run of digits/commas/dots wins.
_PRICE_PATTERN = re.compile(r"\d[\d,]*(?:\.\d+)?|\.\d+")


def parse_price(text: str | None) -> Decimal:
    """Parse a price-like string into a Decimal.

    Currency symbols, codes, thousands separators and whitespace are
    ignored. Returns ``Decimal("0")`` when no number can be read, which the
    rest of the harness treats as "price unknown".
    """

    if not text:
        return ZERO

    match = _PRICE_PATTERN.search(text)
    if not match:
        return ZERO

    number = match.group(0).replace(",", "")
    try:
        value = Decimal(number)
    except InvalidOperation:
        return ZERO

    if not value.is_finite() or value < 0:
        return ZERO
    return value


def format_price(value: Decimal | float | int, symbol: str = "$") -> str:
    """Format *value* as ``$50.99``."""

    quantized = Decimal(str(value)).quantize(Decimal("0.01"))
    return f"{symbol}{quantized}"


def is_valid_price(text: str | None) -> bool:
    return parse_price(text) > 0


__all__ = ["ZERO", "format_price", "is_valid_price", "parse_price"]
