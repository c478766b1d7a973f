"""Price formatting per store currency."""

from decimal import Decimal

import pytest

from storefront.services.currency import format_price


@pytest.mark.parametrize(
    ("amount", "code", "expected"),
    [
        (5000, "XOF", "5 000 FCFA"),
        (Decimal("1999.5"), "XOF", "2 000 FCFA"),
        (Decimal("1234.5"), "EUR", "1 234,50 €"),
        (Decimal("12"), "EUR", "12,00 €"),
        (Decimal("1234.5"), "USD", "$1,234.50"),
        (Decimal("0.5"), "USD", "$0.50"),
        (12, "GBP", "12.00 GBP"),
        (None, "XOF", "0 FCFA"),
    ],
)
def test_format_price(amount, code, expected):
    assert format_price(amount, code) == expected


def test_default_currency_is_xof():
    assert format_price(250) == "250 FCFA"
