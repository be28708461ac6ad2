"""Tenant (client) domain entities."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


class Currency(str, Enum):
    """Currencies a tenant can trade in."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    VES = "VES"
    COP = "COP"


class Client(BaseModel):
    """An isolated customer account. Owns every other entity."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    main_currency: Currency = Currency.USD
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
