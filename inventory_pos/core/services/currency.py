"""
Currency conversion and currency-exchange validation.

Both functions are pure. The converter runs on the create path and on the
reversal path of a purchase line, so it must give the same answer both times.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from inventory_pos.core.entities.client import Currency
from inventory_pos.core.exceptions import ValidationError


@dataclass(frozen=True)
class CurrencyExchange:
    """Resolved exchange context of a document."""

    currency_exchange_from: Currency
    currency_exchange_to: Currency
    exchange_rate: float


def round_money(value: float, places: int = 2) -> float:
    """Round half-up to ``places`` decimals."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def amount_in_main_currency(
    main_currency: Currency,
    transaction_currency: Currency,
    currency_exchange_from: Currency,
    exchange_rate: float,
    amount: float,
) -> float:
    """
    Express ``amount`` in the tenant's main currency.

    ``exchange_rate`` is read in the direction given by
    ``currency_exchange_from``: from the main currency it is the number of
    transaction-currency units one main unit buys, so the amount is
    multiplied; otherwise it is divided. No rounding.
    """
    if transaction_currency == main_currency:
        return amount
    if currency_exchange_from == main_currency:
        return amount * exchange_rate
    return amount / exchange_rate


def validate_currency_exchange(
    currency: Currency,
    currency_exchange_from: Currency | None,
    currency_exchange_to: Currency | None,
    exchange_rate: float | None,
    main_currency: Currency,
) -> CurrencyExchange:
    """
    Check and normalize the exchange fields of a document.

    A document in the main currency ignores whatever exchange fields were
    sent and gets ``currency -> currency`` at rate 1.

    Raises:
        ValidationError: missing fields, identical sides, or a side outside
            ``{currency, main_currency}``.
    """
    if currency == main_currency:
        return CurrencyExchange(
            currency_exchange_from=currency,
            currency_exchange_to=currency,
            exchange_rate=1.0,
        )

    if currency_exchange_from is None or currency_exchange_to is None or exchange_rate is None:
        raise ValidationError(
            field="currency_exchange",
            message=(
                "currency_exchange_from, currency_exchange_to and exchange_rate "
                f"are required fields when currency differs from {main_currency.value}"
            ),
        )

    if currency_exchange_from == currency_exchange_to:
        raise ValidationError(
            field="currency_exchange",
            message="currency_exchange_from and currency_exchange_to must be different",
            value=currency_exchange_from.value,
        )

    allowed = {currency, main_currency}
    for side in (currency_exchange_from, currency_exchange_to):
        if side not in allowed:
            raise ValidationError(
                field="currency_exchange",
                message=(
                    f"Exchange currencies must be {currency.value} or "
                    f"{main_currency.value}, got {side.value}"
                ),
                value=side.value,
            )

    if exchange_rate <= 0:
        raise ValidationError(
            field="exchange_rate",
            message="exchange_rate must be greater than zero",
            value=exchange_rate,
        )

    return CurrencyExchange(
        currency_exchange_from=currency_exchange_from,
        currency_exchange_to=currency_exchange_to,
        exchange_rate=exchange_rate,
    )
