"""
Variant combination engine.

Enumerates the option space of a set of variants and validates
client-supplied option combinations against a tenant's variants.
Combinations are compared as sets: a canonical key is the sorted id tuple.
"""

from itertools import product

from inventory_pos.config import get_logger
from inventory_pos.core.entities.variant import Variant, VariantOption
from inventory_pos.core.exceptions import (
    ValidationError,
    VariantNotFoundError,
    VariantOptionNotFoundError,
)
from inventory_pos.core.interfaces.variant_store import IVariantStore

logger = get_logger(__name__)


def all_option_combinations(variants: list[Variant]) -> list[list[VariantOption]]:
    """
    Cartesian product of one option per variant.

    Order follows variant order, then option order. No variants gives no
    combinations.
    """
    if not variants:
        return []
    return [list(combination) for combination in product(*(v.options for v in variants))]


def canonical_key(combination: list[int]) -> tuple[int, ...]:
    return tuple(sorted(combination))


def has_duplicate_combinations(combinations: list[list[int]]) -> bool:
    keys = [canonical_key(c) for c in combinations]
    return len(keys) != len(set(keys))


def validate_option_combinations(
    combinations: list[list[int]],
    variants: list[Variant],
) -> list[Variant]:
    """
    Validate option combinations against the tenant's variants.

    Checks run in this order and stop at the first failure:

    1. the tenant has at least one variant;
    2. every referenced option id belongs to one of its variants;
    3. every combination has one option per touched variant;
    4. no combination holds two options of the same variant;
    5. no two combinations are the same set.

    Returns:
        The variants touched by the combinations, in ``variants`` order.
    """
    if not variants:
        raise VariantNotFoundError(message="The client has no variants configured")

    variant_by_option: dict[int, int] = {}
    for variant in variants:
        for option_id in variant.option_ids:
            variant_by_option[option_id] = variant.id  # type: ignore[assignment]

    referenced: list[int] = []
    for combination in combinations:
        for option_id in combination:
            if option_id not in referenced:
                referenced.append(option_id)

    for option_id in referenced:
        if option_id not in variant_by_option:
            raise VariantOptionNotFoundError(option_id)

    touched_ids = {variant_by_option[option_id] for option_id in referenced}
    expected = len(touched_ids)

    for combination in combinations:
        if len(combination) != expected:
            raise ValidationError(
                field="option_combination",
                message=(
                    f"All option combinations must have length: {expected}. "
                    f"But got length '{len(combination)}' in {combination}"
                ),
                value=combination,
            )
        owners = [variant_by_option[option_id] for option_id in combination]
        if len(set(owners)) != len(owners):
            raise ValidationError(
                field="option_combination",
                message=(
                    "More than one option belongs to the same variant in "
                    f"combination {combination}"
                ),
                value=combination,
            )

    if has_duplicate_combinations(combinations):
        raise ValidationError(
            field="option_combination",
            message="One or more option combinations are identical",
        )

    return [variant for variant in variants if variant.id in touched_ids]


class VariantCombinationService:
    """Validates combinations against the variants stored for a tenant."""

    def __init__(self, variant_store: IVariantStore) -> None:
        self._variant_store = variant_store

    async def validate(
        self, combinations: list[list[int]], client_id: str
    ) -> list[Variant]:
        variants = await self._variant_store.list_variants(client_id)
        touched = validate_option_combinations(combinations, variants)
        logger.debug(
            "option_combinations_validated",
            client_id=client_id,
            combinations=len(combinations),
            variants=[v.id for v in touched],
        )
        return touched
