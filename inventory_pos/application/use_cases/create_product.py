"""Create Product Use Cases: unique products and products with variants."""

from dataclasses import dataclass

from inventory_pos.application.dto.requests import (
    CreateProductWithVariantsRequest,
    CreateUniqueProductRequest,
    ProductRequest,
)
from inventory_pos.application.dto.responses import ProductResponse
from inventory_pos.application.use_cases.base import TransactionFactory, UseCase
from inventory_pos.config import get_logger
from inventory_pos.config.settings import InventorySettings
from inventory_pos.core.entities.lookup import ByName
from inventory_pos.core.entities.product import (
    Product,
    ProductStock,
    ProductType,
    Status,
    StockType,
)
from inventory_pos.core.entities.variant import Variant
from inventory_pos.core.exceptions import DuplicateKeyError
from inventory_pos.core.interfaces.client_store import IClientStore
from inventory_pos.core.interfaces.product_store import IProductStore
from inventory_pos.core.interfaces.variant_store import IVariantStore
from inventory_pos.core.services.variant_combinations import (
    VariantCombinationService,
    all_option_combinations,
    canonical_key,
)

logger = get_logger(__name__)


@dataclass
class CreateProductResult:
    """Result of creating a product."""

    product: Product


class CreateProductUseCase(UseCase):
    """Shared checks and response mapping for product creation."""

    async def _ensure_name_available(self, name: str, client_id: str) -> None:
        store = await self._get_product_store()
        if await store.find_product(ByName(name), client_id) is not None:
            raise DuplicateKeyError(
                f"Already exist a product with name '{name}'",
                details={"name": name},
            )

    @staticmethod
    def _new_product(
        client_id: str,
        request: ProductRequest,
        product_type: ProductType,
        total_for_average_cost: float,
    ) -> Product:
        return Product(
            client_id=client_id,
            type=product_type,
            reference=request.reference,
            name=request.name,
            description=request.description,
            unit_type=request.unit_type,
            base_cost=request.base_cost,
            average_cost=request.base_cost,
            total_for_average_cost=total_for_average_cost,
            price=request.price,
            metadata=request.metadata,
        )

    def to_response(self, result: CreateProductResult) -> ProductResponse:
        """Convert result to API response."""
        return ProductResponse.model_validate(result.product, from_attributes=True)


class CreateUniqueProductUseCase(CreateProductUseCase):
    """Create a product with its single implicit SKU.

    The starting average cost is the base cost, weighted by the initial
    quantity.
    """

    async def execute(
        self, client_id: str, request: CreateUniqueProductRequest
    ) -> CreateProductResult:
        logger.info("create_unique_product_started", client_id=client_id, name=request.product.name)

        await self._get_client(client_id)
        await self._ensure_name_available(request.product.name, client_id)

        initial = float(request.stock.initial_quantity)
        product = self._new_product(client_id, request.product, ProductType.UNIQUE, initial)
        stock = ProductStock(
            type=StockType.UNIQUE,
            initial_quantity=initial,
            quantity=initial,
            cost=request.product.base_cost,
            status=request.stock.status or Status.ACTIVE,
        )

        store = await self._get_product_store()
        async with self._unit_of_work():
            product = await store.create_product(product)
            stock.product_id = product.id
            product.stocks = [await store.create_stock(stock)]

        logger.info("unique_product_created", product_id=product.id, quantity=initial)
        return CreateProductResult(product=product)


class CreateProductWithVariantsUseCase(CreateProductUseCase):
    """
    Create a parent product with one child SKU per option combination.

    The full option space of the touched variants is materialized: supplied
    combinations keep their quantity and status, the others start inactive
    with zero stock. The touched variants are then locked against edits.
    """

    def __init__(
        self,
        client_store: IClientStore | None = None,
        product_store: IProductStore | None = None,
        variant_store: IVariantStore | None = None,
        transaction_factory: TransactionFactory | None = None,
        inventory_settings: InventorySettings | None = None,
    ):
        super().__init__(
            client_store=client_store,
            product_store=product_store,
            transaction_factory=transaction_factory,
            inventory_settings=inventory_settings,
        )
        self._variant_store = variant_store

    async def _get_variant_store(self) -> IVariantStore:
        if self._variant_store is None:
            from inventory_pos.infrastructure.storage.sqlite import get_variant_store

            self._variant_store = await get_variant_store()
        return self._variant_store

    async def execute(
        self, client_id: str, request: CreateProductWithVariantsRequest
    ) -> CreateProductResult:
        logger.info(
            "create_product_with_variants_started",
            client_id=client_id,
            name=request.product.name,
            combinations=len(request.items_variants),
        )

        await self._get_client(client_id)

        variant_store = await self._get_variant_store()
        product_store = await self._get_product_store()
        combinations = [item.option_combination for item in request.items_variants]

        # Variants are validated and locked within one unit of work
        async with self._unit_of_work():
            variants = await VariantCombinationService(variant_store).validate(
                combinations, client_id
            )
            await self._ensure_name_available(request.product.name, client_id)

            stocks = self._build_stocks(request, variants)
            total = sum(stock.initial_quantity for stock in stocks)
            product = self._new_product(client_id, request.product, ProductType.PARENT, total)
            variant_ids = [variant.id for variant in variants]

            product = await product_store.create_product(product)
            await product_store.link_variants(product.id, variant_ids)  # type: ignore[arg-type]
            created: list[ProductStock] = []
            for stock in stocks:
                stock.product_id = product.id
                created.append(await product_store.create_stock(stock))
            await variant_store.set_can_edit(variant_ids, False)  # type: ignore[arg-type]

        product.variant_ids = variant_ids  # type: ignore[assignment]
        product.stocks = created
        logger.info(
            "product_with_variants_created",
            product_id=product.id,
            variants=variant_ids,
            stocks=len(created),
            active_stocks=sum(1 for s in created if s.status is Status.ACTIVE),
        )
        return CreateProductResult(product=product)

    @staticmethod
    def _build_stocks(
        request: CreateProductWithVariantsRequest, variants: list[Variant]
    ) -> list[ProductStock]:
        """One stock per combination; unsupplied ones start empty and inactive."""
        supplied = {
            canonical_key(item.option_combination): item.stock for item in request.items_variants
        }
        stocks: list[ProductStock] = []
        for options in all_option_combinations(variants):
            option_ids = [option.id for option in options]
            requested = supplied.get(canonical_key(option_ids))  # type: ignore[arg-type]
            if requested is not None:
                quantity = float(requested.initial_quantity)
                status = requested.status or Status.ACTIVE
            else:
                quantity = 0.0
                status = Status.INACTIVE
            stocks.append(
                ProductStock(
                    type=StockType.CHILD,
                    option_combination=option_ids,
                    initial_quantity=quantity,
                    quantity=quantity,
                    cost=request.product.base_cost,
                    status=status,
                )
            )
        return stocks
