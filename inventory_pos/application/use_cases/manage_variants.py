"""
Variant management use cases.

A variant can be renamed, have options added, renamed or removed, and be
deleted only while no product is built from it (``can_edit``).
"""

from dataclasses import dataclass

from inventory_pos.application.dto.requests import (
    CreateVariantRequest,
    UpdateVariantRequest,
)
from inventory_pos.application.dto.responses import VariantResponse
from inventory_pos.application.use_cases.base import TransactionFactory, UseCase
from inventory_pos.config import get_logger
from inventory_pos.core.entities.lookup import ById, ByName
from inventory_pos.core.entities.variant import Variant, VariantOption
from inventory_pos.core.exceptions import (
    DuplicateKeyError,
    ValidationError,
    VariantLockedError,
    VariantNotFoundError,
    VariantOptionNotFoundError,
)
from inventory_pos.core.interfaces.client_store import IClientStore
from inventory_pos.core.interfaces.variant_store import IVariantStore

logger = get_logger(__name__)


@dataclass
class VariantResult:
    """Result of a variant write."""

    variant: Variant


def ensure_distinct_option_names(names: list[str]) -> None:
    """Option names are unique within a variant, ignoring case."""
    seen: set[str] = set()
    for name in names:
        key = name.strip().lower()
        if key in seen:
            raise ValidationError(
                field="options",
                message=f"Option '{name}' is repeated",
                value=name,
            )
        seen.add(key)


class VariantUseCase(UseCase):
    """Base for variant use cases."""

    def __init__(
        self,
        client_store: IClientStore | None = None,
        variant_store: IVariantStore | None = None,
        transaction_factory: TransactionFactory | None = None,
    ):
        super().__init__(client_store=client_store, transaction_factory=transaction_factory)
        self._variant_store = variant_store

    async def _get_variant_store(self) -> IVariantStore:
        if self._variant_store is None:
            from inventory_pos.infrastructure.storage.sqlite import get_variant_store

            self._variant_store = await get_variant_store()
        return self._variant_store

    async def _ensure_name_available(
        self, name: str, client_id: str, current_id: int | None = None
    ) -> None:
        store = await self._get_variant_store()
        existing = await store.find_variant(ByName(name), client_id)
        if existing is not None and existing.id != current_id:
            raise DuplicateKeyError(
                f"Already exist a variant with name '{name}'",
                details={"name": name},
            )

    async def _get_editable_variant(self, variant_id: int, client_id: str) -> Variant:
        store = await self._get_variant_store()
        variant = await store.find_variant(ById(variant_id), client_id)
        if variant is None:
            raise VariantNotFoundError(variant_id)
        if not variant.can_edit:
            raise VariantLockedError(variant_id)
        return variant

    def to_response(self, result: VariantResult) -> VariantResponse:
        """Convert result to API response."""
        return VariantResponse.model_validate(result.variant, from_attributes=True)


class CreateVariantUseCase(VariantUseCase):
    """Create a variant with its options."""

    async def execute(self, client_id: str, request: CreateVariantRequest) -> VariantResult:
        await self._get_client(client_id)
        ensure_distinct_option_names(request.options)
        await self._ensure_name_available(request.name, client_id)

        variant = Variant(
            client_id=client_id,
            name=request.name,
            description=request.description,
            options=[VariantOption(name=name.strip()) for name in request.options],
        )
        store = await self._get_variant_store()
        async with self._unit_of_work():
            variant = await store.create_variant(variant)
        return VariantResult(variant=variant)


class UpdateVariantUseCase(VariantUseCase):
    """
    Update an editable variant.

    Option changes are applied in request order:
    - no id: add an option
    - id and name: rename it
    - id without name (or empty): remove it

    The lock is read inside the unit of work, so a product created
    concurrently either sees the edited options or blocks the edit.
    """

    async def execute(
        self, client_id: str, variant_id: int, request: UpdateVariantRequest
    ) -> VariantResult:
        await self._get_client(client_id)

        async with self._unit_of_work():
            variant = await self._apply(client_id, variant_id, request)

        logger.info(
            "variant_update_applied",
            variant_id=variant_id,
            option_changes=len(request.options or []),
        )
        return VariantResult(variant=variant)

    async def _apply(
        self, client_id: str, variant_id: int, request: UpdateVariantRequest
    ) -> Variant:
        variant = await self._get_editable_variant(variant_id, client_id)

        if request.name is not None and request.name.lower() != variant.name.lower():
            await self._ensure_name_available(request.name, client_id, current_id=variant.id)

        options = {option.id: option for option in variant.options}
        for change in request.options or []:
            if change.id is not None and change.id not in options:
                raise VariantOptionNotFoundError(change.id)
            if change.id is None and not (change.name or "").strip():
                raise ValidationError(
                    field="options",
                    message="A new option needs a name",
                )

        # Resulting option names must stay distinct
        names = {option.id: option.name for option in variant.options}
        added: list[str] = []
        for change in request.options or []:
            name = (change.name or "").strip()
            if change.id is None:
                added.append(name)
            elif name:
                names[change.id] = name
            else:
                names.pop(change.id, None)
        ensure_distinct_option_names(list(names.values()) + added)

        store = await self._get_variant_store()
        if request.name is not None:
            variant.name = request.name
        if request.description is not None:
            variant.description = request.description
        variant = await store.update_variant(variant)

        for change in request.options or []:
            name = (change.name or "").strip()
            if change.id is None:
                option = await store.add_option(VariantOption(variant_id=variant.id, name=name))
                options[option.id] = option
            elif name:
                await store.rename_option(change.id, name)
                options[change.id].name = name
            else:
                await store.delete_option(change.id)
                options.pop(change.id, None)

        variant.options = sorted(options.values(), key=lambda o: o.id or 0)
        return variant


class DeleteVariantUseCase(VariantUseCase):
    """Delete an editable variant and its options."""

    async def execute(self, client_id: str, variant_id: int) -> VariantResult:
        await self._get_client(client_id)

        store = await self._get_variant_store()
        async with self._unit_of_work():
            variant = await self._get_editable_variant(variant_id, client_id)
            await store.delete_variant(variant_id)
        return VariantResult(variant=variant)
