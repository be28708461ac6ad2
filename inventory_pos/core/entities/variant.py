"""Variant (dimension) domain entities."""

from datetime import datetime

from pydantic import BaseModel, Field


class VariantOption(BaseModel):
    """A discrete value along a variant dimension (e.g. "M" for Size)."""

    id: int | None = None
    variant_id: int | None = None
    name: str


class Variant(BaseModel):
    """An axis of product variation owned by a tenant.

    ``can_edit`` turns false once a product binds to the variant; from then on
    its option set is frozen so existing SKUs keep their meaning.
    """

    id: int | None = None
    client_id: str
    name: str
    description: str | None = None
    can_edit: bool = True
    options: list[VariantOption] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def option_ids(self) -> list[int]:
        return [option.id for option in self.options if option.id is not None]
