"""Tests for currency conversion and exchange validation."""

import pytest

from inventory_pos.core.entities.client import Currency
from inventory_pos.core.exceptions import ValidationError
from inventory_pos.core.services.currency import (
    amount_in_main_currency,
    round_money,
    validate_currency_exchange,
)


class TestAmountInMainCurrency:
    @pytest.mark.parametrize("amount", [0.0, 1.0, 8.0, 1234.5678])
    def test_main_currency_is_identity(self, amount):
        result = amount_in_main_currency(Currency.USD, Currency.USD, Currency.EUR, 37.0, amount)
        assert result == amount

    def test_from_main_multiplies(self):
        # 1 USD buys 36.5 VES
        result = amount_in_main_currency(Currency.USD, Currency.VES, Currency.USD, 36.5, 2.0)
        assert result == pytest.approx(73.0)

    def test_from_transaction_currency_divides(self):
        result = amount_in_main_currency(Currency.USD, Currency.EUR, Currency.EUR, 0.8, 8.0)
        assert result == pytest.approx(10.0)

    def test_round_trip_composes_to_identity(self):
        rate = 1.37
        there = amount_in_main_currency(Currency.USD, Currency.EUR, Currency.EUR, rate, 19.99)
        back = amount_in_main_currency(Currency.USD, Currency.EUR, Currency.USD, rate, there)
        assert back == pytest.approx(19.99)

    def test_no_rounding(self):
        result = amount_in_main_currency(Currency.USD, Currency.EUR, Currency.EUR, 3.0, 10.0)
        assert result == pytest.approx(10.0 / 3.0)
        assert result != round_money(result)


class TestRoundMoney:
    def test_half_up(self):
        assert round_money(2.675) == 2.68
        assert round_money(0.125) == 0.13

    def test_places(self):
        assert round_money(1.23456, places=3) == 1.235


class TestValidateCurrencyExchange:
    def test_main_currency_forces_identity(self):
        exchange = validate_currency_exchange(
            Currency.USD, Currency.EUR, Currency.GBP, 9.9, Currency.USD
        )
        assert exchange.currency_exchange_from == Currency.USD
        assert exchange.currency_exchange_to == Currency.USD
        assert exchange.exchange_rate == 1.0

    def test_missing_rate_fails(self):
        with pytest.raises(ValidationError, match="required"):
            validate_currency_exchange(Currency.EUR, Currency.EUR, Currency.USD, None, Currency.USD)

    @pytest.mark.parametrize(
        "exchange_from,exchange_to",
        [(None, Currency.USD), (Currency.EUR, None)],
    )
    def test_missing_side_fails(self, exchange_from, exchange_to):
        with pytest.raises(ValidationError):
            validate_currency_exchange(Currency.EUR, exchange_from, exchange_to, 1.1, Currency.USD)

    def test_same_sides_fail(self):
        with pytest.raises(ValidationError, match="must be different"):
            validate_currency_exchange(Currency.EUR, Currency.EUR, Currency.EUR, 1.1, Currency.USD)

    def test_third_currency_fails(self):
        with pytest.raises(ValidationError, match="GBP"):
            validate_currency_exchange(Currency.EUR, Currency.EUR, Currency.GBP, 1.1, Currency.USD)

    def test_non_positive_rate_fails(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            validate_currency_exchange(Currency.EUR, Currency.USD, Currency.EUR, 0, Currency.USD)

    def test_valid_exchange_is_kept(self):
        exchange = validate_currency_exchange(
            Currency.EUR, Currency.USD, Currency.EUR, 0.92, Currency.USD
        )
        assert exchange.currency_exchange_from == Currency.USD
        assert exchange.currency_exchange_to == Currency.EUR
        assert exchange.exchange_rate == 0.92
