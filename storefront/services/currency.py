"""Price formatting for the currencies a store can sell in."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    label: str
    decimals: int
    symbol_first: bool = False


CURRENCIES: dict[str, Currency] = {
    "XOF": Currency(code="XOF", symbol="FCFA", label="Franc CFA", decimals=0),
    "EUR": Currency(code="EUR", symbol="€", label="Euro", decimals=2),
    "USD": Currency(code="USD", symbol="$", label="US Dollar", decimals=2, symbol_first=True),
}

DEFAULT_CURRENCY = "XOF"


def format_price(
    amount: Decimal | int | float | None, currency_code: str = DEFAULT_CURRENCY
) -> str:
    """Format ``amount`` with digit grouping, e.g. ``5 000 FCFA``, ``12,50 €``, ``$12.50``.

    Unknown codes are rendered as ``<amount> <CODE>`` with two decimals.
    """
    currency = CURRENCIES.get(currency_code)
    decimals = currency.decimals if currency else 2
    value = Decimal(str(amount or 0)).quantize(
        Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP
    )
    number = f"{value:,.{decimals}f}"

    if currency is None:
        return f"{number} {currency_code}"
    if currency.symbol_first:
        return f"{currency.symbol}{number}"

    # French-style grouping for the non-USD currencies: "1 234,50"
    number = number.replace(",", " ").replace(".", ",")
    return f"{number} {currency.symbol}"
