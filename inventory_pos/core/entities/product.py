"""Product and product stock (SKU) domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class ProductType(str, Enum):
    """Unique products have one implicit SKU; parents have one per combination."""

    UNIQUE = "unique"
    PARENT = "parent"


class StockType(str, Enum):
    UNIQUE = "unique"
    CHILD = "child"


class Status(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class MeasureUnitType(str, Enum):
    UNIT = "unit"
    KILOGRAM = "kilogram"
    LITER = "liter"
    METER = "meter"


class ProductStock(BaseModel):
    """A stock-keeping unit.

    For a child stock, ``option_combination`` holds one option id per
    dimension of the parent product, kept in ascending order so two
    combinations compare equal as sets.
    """

    id: int | None = None
    product_id: int | None = None
    type: StockType = StockType.UNIQUE
    option_combination: list[int] = Field(default_factory=list)
    initial_quantity: float = 0.0
    quantity: float = 0.0
    cost: float = 0.0
    status: Status = Status.ACTIVE
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("option_combination")
    @classmethod
    def sort_combination(cls, v: list[int]) -> list[int]:
        return sorted(v)


class Product(BaseModel):
    """A product and its cost-basis fields.

    ``total_for_average_cost`` is the weighting divisor of ``average_cost``.
    It moves only with purchase lines, never with sales, so it is not the
    on-hand quantity.
    """

    id: int | None = None
    client_id: str
    type: ProductType = ProductType.UNIQUE
    reference: str | None = None
    name: str
    description: str | None = None
    unit_type: MeasureUnitType = MeasureUnitType.UNIT
    base_cost: float = 0.0
    average_cost: float = 0.0
    total_for_average_cost: float = 0.0
    price: float = 0.0
    status: Status = Status.ACTIVE
    metadata: dict = Field(default_factory=dict)
    version: int = 0
    variant_ids: list[int] = Field(default_factory=list)
    stocks: list[ProductStock] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def cost_basis(self) -> float:
        """Cumulative cost reconstructed from the running average."""
        return self.total_for_average_cost * self.average_cost
