"""Tests for the variant combination engine."""

from unittest.mock import AsyncMock

import pytest

from inventory_pos.core.entities.variant import Variant, VariantOption
from inventory_pos.core.exceptions import (
    ValidationError,
    VariantNotFoundError,
    VariantOptionNotFoundError,
)
from inventory_pos.core.services.variant_combinations import (
    VariantCombinationService,
    all_option_combinations,
    canonical_key,
    has_duplicate_combinations,
    validate_option_combinations,
)


@pytest.fixture
def material_variant() -> Variant:
    return Variant(
        id=3,
        client_id="tenant-usd",
        name="Material",
        options=[
            VariantOption(id=5, variant_id=3, name="Cotton"),
            VariantOption(id=6, variant_id=3, name="Wool"),
            VariantOption(id=7, variant_id=3, name="Silk"),
        ],
    )


class TestAllOptionCombinations:
    def test_no_variants(self):
        assert all_option_combinations([]) == []

    def test_two_by_three(self, size_variant, material_variant):
        combinations = all_option_combinations([size_variant, material_variant])
        assert len(combinations) == 6
        assert all(len(c) == 2 for c in combinations)
        keys = {canonical_key([o.id for o in c]) for c in combinations}
        assert len(keys) == 6

    def test_order_follows_variants(self, size_variant, color_variant):
        combinations = all_option_combinations([size_variant, color_variant])
        assert [[o.id for o in c] for c in combinations] == [[1, 3], [1, 4], [2, 3], [2, 4]]


class TestDuplicates:
    def test_order_insensitive(self):
        assert has_duplicate_combinations([[1, 2], [2, 1]])

    def test_distinct(self):
        assert not has_duplicate_combinations([[1, 3], [2, 3]])


class TestValidateOptionCombinations:
    def test_no_variants_configured(self):
        with pytest.raises(VariantNotFoundError, match="no variants configured"):
            validate_option_combinations([[1]], [])

    def test_unknown_option(self, size_variant):
        with pytest.raises(VariantOptionNotFoundError, match="Option id 99 does not exist"):
            validate_option_combinations([[1], [99]], [size_variant])

    def test_wrong_arity(self, size_variant, color_variant):
        with pytest.raises(ValidationError) as exc_info:
            validate_option_combinations([[1, 3], [2]], [size_variant, color_variant])
        assert "must have length: 2" in exc_info.value.message
        assert "'1'" in exc_info.value.message

    def test_single_combination_touching_two_variants_needs_both(self, size_variant, color_variant):
        with pytest.raises(ValidationError, match="length: 2"):
            validate_option_combinations([[1, 3], [4]], [size_variant, color_variant])

    def test_two_options_of_same_variant(self, size_variant, color_variant):
        with pytest.raises(ValidationError, match="same variant"):
            validate_option_combinations([[1, 2], [3, 4]], [size_variant, color_variant])

    def test_identical_combinations(self, size_variant, color_variant):
        with pytest.raises(ValidationError, match="identical"):
            validate_option_combinations([[1, 3], [3, 1]], [size_variant, color_variant])

    def test_returns_touched_variants_only(self, size_variant, color_variant, material_variant):
        touched = validate_option_combinations(
            [[1, 5], [2, 6]], [size_variant, color_variant, material_variant]
        )
        assert [v.id for v in touched] == [1, 3]


class TestVariantCombinationService:
    async def test_loads_tenant_variants(self, size_variant):
        store = AsyncMock()
        store.list_variants.return_value = [size_variant]

        touched = await VariantCombinationService(store).validate([[1], [2]], "tenant-usd")

        store.list_variants.assert_awaited_once_with("tenant-usd")
        assert touched == [size_variant]
