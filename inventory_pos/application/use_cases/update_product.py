"""Update Product Use Case."""

from inventory_pos.application.dto.requests import UpdateProductRequest
from inventory_pos.application.dto.responses import ProductResponse
from inventory_pos.application.use_cases.base import UseCase
from inventory_pos.application.use_cases.create_product import CreateProductResult
from inventory_pos.config import get_logger
from inventory_pos.core.entities.lookup import ById, ByName
from inventory_pos.core.exceptions import DuplicateKeyError, ProductNotFoundError

logger = get_logger(__name__)


class UpdateProductUseCase(UseCase):
    """Partial update of a product's descriptive and pricing fields.

    Average cost and its divisor only move through purchases.
    """

    async def execute(
        self, client_id: str, product_id: int, request: UpdateProductRequest
    ) -> CreateProductResult:
        await self._get_client(client_id)
        store = await self._get_product_store()

        product = await store.find_product(ById(product_id), client_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        changes = request.model_dump(exclude_unset=True, exclude_none=True)
        new_name = changes.get("name")
        if new_name is not None and new_name.lower() != product.name.lower():
            existing = await store.find_product(ByName(new_name), client_id)
            if existing is not None and existing.id != product.id:
                raise DuplicateKeyError(
                    f"Already exist a product with name '{new_name}'",
                    details={"name": new_name},
                )

        for field, value in changes.items():
            setattr(product, field, value)
        product = await store.update_product(product)

        logger.info("product_update_applied", product_id=product_id, fields=sorted(changes))
        return CreateProductResult(product=product)

    def to_response(self, result: CreateProductResult) -> ProductResponse:
        """Convert result to API response."""
        return ProductResponse.model_validate(result.product, from_attributes=True)
