"""Supplier and customer entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class PartyKind(str, Enum):
    """Counterparty of a stock transaction."""

    SUPPLIER = "supplier"
    CUSTOMER = "customer"


class Party(BaseModel):
    """A supplier (for purchases) or a customer (for sales)."""

    id: int | None = None
    client_id: str
    kind: PartyKind
    name: str
    identification: str | None = None
    email: str | None = None
    phone_number: str | None = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
