"""
Core business logic services.

Layer-pure services that depend only on:
- inventory_pos/core/entities/*
- inventory_pos/core/interfaces/*
- inventory_pos/core/exceptions.py

NO infrastructure imports. Stores and policies are injected via constructor.
"""

from inventory_pos.core.services.cost_accountant import (
    CostAccountant,
    CostUpdate,
    EntityAction,
    compute_cost_update,
)
from inventory_pos.core.services.currency import (
    CurrencyExchange,
    amount_in_main_currency,
    round_money,
    validate_currency_exchange,
)
from inventory_pos.core.services.stock_ledger import StockDirection, StockLedger
from inventory_pos.core.services.variant_combinations import (
    VariantCombinationService,
    all_option_combinations,
    canonical_key,
    has_duplicate_combinations,
    validate_option_combinations,
)

__all__ = [
    # Currency
    "CurrencyExchange",
    "amount_in_main_currency",
    "round_money",
    "validate_currency_exchange",
    # Variant combinations
    "VariantCombinationService",
    "all_option_combinations",
    "canonical_key",
    "has_duplicate_combinations",
    "validate_option_combinations",
    # Stock ledger
    "StockDirection",
    "StockLedger",
    # Cost accountant
    "CostAccountant",
    "CostUpdate",
    "EntityAction",
    "compute_cost_update",
]
