"""
Tests for currency conversion, formatting and the cookie-backed preference.
"""

import pytest
from decimal import Decimal
from fastapi import Response

from stayhub.services.currency import (
    Currency,
    CurrencyConverter,
    round_half_up,
    parse_currency,
    persist_currency
)


class TestRoundHalfUp:
    """Test whole-number rounding of converted prices."""

    def test_rounds_half_away_from_zero(self):
        assert round_half_up(Decimal("2.5")) == 3
        assert round_half_up(Decimal("3.5")) == 4

    def test_rounds_down_below_half(self):
        assert round_half_up(Decimal("1169.49")) == 1169


class TestCurrencyConverter:
    """Test KES/USD conversion."""

    def test_usd_conversion_of_monthly_rent(self):
        converter = CurrencyConverter(Currency.USD, rate=0.0078)

        assert converter.convert_price(150000) == 1170
        assert converter.format_price(150000) == "$1,170"

    def test_kes_is_identity(self):
        converter = CurrencyConverter(Currency.KES)

        assert converter.convert_price(150000) == 150000
        assert converter.convert_price(Decimal("150000.00")) == 150000
        assert converter.format_price(150000) == "KES 150,000"

    def test_usd_rounds_to_whole_dollars(self):
        converter = CurrencyConverter(Currency.USD, rate=0.0078)

        # 25000 * 0.0078 = 195.0, 82500 * 0.0078 = 643.5
        assert converter.format_price(25000) == "$195"
        assert converter.convert_price(82500) == 644

    def test_default_rate_comes_from_settings(self):
        converter = CurrencyConverter(Currency.USD)

        assert converter.rate == Decimal("0.0078")

    def test_accepts_currency_code_string(self):
        converter = CurrencyConverter("USD")

        assert converter.currency == Currency.USD


class TestCurrencyPreference:
    """Test parsing and persisting the selected currency."""

    @pytest.mark.parametrize("value,expected", [
        ("USD", Currency.USD),
        ("usd", Currency.USD),
        ("KES", Currency.KES),
        (None, Currency.KES),
        ("", Currency.KES),
        ("EUR", Currency.KES),
    ])
    def test_parse_currency(self, value, expected):
        assert parse_currency(value) == expected

    def test_persist_currency_sets_cookie(self):
        response = Response()

        persist_currency(response, Currency.USD)

        cookie = response.headers["set-cookie"]
        assert cookie.startswith("currency=USD")
        assert "Max-Age=" in cookie
