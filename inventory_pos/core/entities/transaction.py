"""Stock transaction (purchase / sale) domain entities."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from inventory_pos.core.entities.client import Currency
from inventory_pos.core.entities.party import PartyKind


class TransactionKind(str, Enum):
    """Purchases bring stock in; sales take it out."""

    PURCHASE = "purchase"
    SALE = "sale"

    @property
    def party_kind(self) -> PartyKind:
        return PartyKind.SUPPLIER if self is TransactionKind.PURCHASE else PartyKind.CUSTOMER


class DocumentType(str, Enum):
    NONE = "none"
    INVOICE = "invoice"
    RECEIPT = "receipt"


class StockTransactionItem(BaseModel):
    """A single line of a purchase or sale."""

    id: int | None = None
    transaction_id: int | None = None
    product_stock_id: int
    product_id: int
    quantity: float
    amount: float  # unit price in the transaction currency
    update_product_base_cost: bool = False  # purchases only
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def line_total(self) -> float:
        return self.quantity * self.amount


class StockTransaction(BaseModel):
    """Header shared by purchases and sales.

    ``currency_exchange_from``/``currency_exchange_to``/``exchange_rate`` are
    always populated once validated: a same-currency document carries its
    own currency on both sides and a rate of 1.
    """

    id: int | None = None
    client_id: str
    kind: TransactionKind
    party_id: int
    document_type: DocumentType = DocumentType.NONE
    invoice_number: str | None = None
    control_number: str | None = None
    document_date: date = Field(default_factory=date.today)
    currency: Currency
    currency_exchange_from: Currency
    currency_exchange_to: Currency
    exchange_rate: float = 1.0
    total: float = 0.0
    comment: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_active: bool = True
    items: list[StockTransactionItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
