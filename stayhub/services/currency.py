"""
Currency conversion and display formatting.
Prices are stored in KES; USD figures are derived with a fixed approximate rate.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union
from fastapi import Request, Response
from stayhub.config import settings
import enum
import logging

logger = logging.getLogger(__name__)

Amount = Union[int, float, Decimal]


class Currency(str, enum.Enum):
    """Supported display currencies."""
    KES = "KES"
    USD = "USD"


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer with halves going up, like Math.round for prices."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _to_decimal(amount: Amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount))


def _group_digits(amount: Decimal) -> str:
    """Thousands separators, dropping a zero fractional part."""
    if amount == amount.to_integral_value():
        return f"{int(amount):,}"
    return f"{amount:,.2f}".rstrip("0").rstrip(".")


class CurrencyConverter:
    """
    Converts KES prices into the selected display currency.

    The converter is stateless apart from the selected currency and the rate,
    so one instance per request is cheap.
    """

    def __init__(self, currency: Currency = Currency.KES, rate: Optional[float] = None):
        self.currency = Currency(currency)
        self.rate = _to_decimal(rate if rate is not None else settings.usd_exchange_rate)

    def convert_price(self, price_in_kes: Amount) -> Union[int, Decimal]:
        """
        Convert a KES amount to the selected currency.

        KES amounts are returned unchanged; USD amounts are rounded to whole dollars.
        """
        amount = _to_decimal(price_in_kes)
        if self.currency == Currency.USD:
            return round_half_up(amount * self.rate)
        if amount == amount.to_integral_value():
            return int(amount)
        return amount

    def format_price(self, price_in_kes: Amount) -> str:
        """
        Format a KES amount for display, e.g. "KES 150,000" or "$1,170".
        """
        converted = _to_decimal(self.convert_price(price_in_kes))
        if self.currency == Currency.USD:
            return f"${_group_digits(converted)}"
        return f"KES {_group_digits(converted)}"


def parse_currency(value: Optional[str], default: Optional[str] = None) -> Currency:
    """Parse a stored currency code, falling back to the default for unknown values."""
    fallback = Currency(default or settings.default_currency)
    if not value:
        return fallback
    try:
        return Currency(value.strip().upper())
    except ValueError:
        logger.debug(f"Ignoring unknown currency preference: {value!r}")
        return fallback


def get_currency_converter(request: Request) -> CurrencyConverter:
    """
    FastAPI dependency returning a converter for the caller's stored preference.
    The preference lives in a client-side cookie.
    """
    currency = parse_currency(request.cookies.get(settings.currency_cookie_name))
    return CurrencyConverter(currency)


def persist_currency(response: Response, currency: Currency) -> None:
    """Store the selected currency on the client."""
    response.set_cookie(
        key=settings.currency_cookie_name,
        value=currency.value,
        max_age=settings.currency_cookie_max_age,
        httponly=False,
        samesite="lax",
    )
