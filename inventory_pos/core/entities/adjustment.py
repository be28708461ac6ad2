"""Manual inventory adjustment entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class AdjustmentType(str, Enum):
    INCREMENT = "increment"
    DECREMENT = "decrement"


class InventoryAdjustment(BaseModel):
    """A manual correction of a SKU's on-hand quantity."""

    id: int | None = None
    client_id: str
    product_stock_id: int
    adjustment_type: AdjustmentType
    quantity: float
    comment: str
    metadata: dict = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.utcnow)
