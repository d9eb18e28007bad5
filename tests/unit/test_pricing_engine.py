"""
Unit Tests for the pricing engine.

Tests calculate_final_pricing():
- Labour by each billing method
- Materials from midpoint quantities with markup and band
- Subtotal/total invariants with and without VAT
- Pure and idempotent
"""

import pytest

from brickquote.models.estimate import EstimateResult
from brickquote.models.job import JobType
from brickquote.models.pricing import FinalPricing, PricingInputs, PricingMethod
from brickquote.services.pricing_engine import (
    calculate_final_pricing,
    calculate_labour_cost,
    unit_cost_for,
)


@pytest.fixture
def estimate():
    """20 m2 wall: 2000-3000 bricks, 20-30 hours."""
    return EstimateResult.model_validate({
        "area_m2": 20,
        "brick_count_range": [2000, 3000],
        "materials": {
            "sand_kg_range": [900, 1100],
            "cement_bags_range": [8, 12],
        },
        "labour_hours_range": [20, 30],
        "recommended_price_gbp_range": [3000, 4000],
    })


def pricing_inputs(**overrides) -> PricingInputs:
    return PricingInputs(**overrides)


def assert_breakdown_adds_up(pricing: FinalPricing):
    assert pricing.subtotal_low == pricing.labour_low + pricing.materials_low
    assert pricing.subtotal_high == pricing.labour_high + pricing.materials_high
    assert pricing.total_low == pricing.subtotal_low + pricing.vat_low
    assert pricing.total_high == pricing.subtotal_high + pricing.vat_high
    assert pricing.total_low <= pricing.total_high


# =============================================================================
# Labour
# =============================================================================


class TestLabour:
    """Labour cost by billing method."""

    def test_day_rate(self, estimate):
        pricing = calculate_final_pricing(
            estimate, pricing_inputs(method=PricingMethod.DAY_RATE, day_rate=220), JobType.BRICKWORK
        )

        assert (pricing.labour_low, pricing.labour_high) == (550, 825)

    def test_per_1000_bricks(self, estimate):
        pricing = calculate_final_pricing(
            estimate, pricing_inputs(method=PricingMethod.PER_1000_BRICKS, rate_per_1000=500), JobType.BRICKWORK
        )

        assert (pricing.labour_low, pricing.labour_high) == (1000, 1500)

    def test_per_m2_band(self, estimate):
        pricing = calculate_final_pricing(
            estimate, pricing_inputs(method=PricingMethod.PER_M2, rate_per_m2=65), JobType.BRICKWORK
        )

        assert (pricing.labour_low, pricing.labour_high) == (1235, 1365)

    def test_unused_rates_ignored(self, estimate):
        low, high = calculate_labour_cost(
            estimate, pricing_inputs(method=PricingMethod.DAY_RATE, day_rate=220, rate_per_1000=9999)
        )

        assert (low, high) == (550, 825)


# =============================================================================
# Materials & VAT
# =============================================================================


class TestMaterialsAndVat:
    """Materials pricing and the VAT line."""

    def test_materials_with_markup(self, estimate):
        pricing = calculate_final_pricing(estimate, pricing_inputs(material_markup=10), JobType.BRICKWORK)

        # (2500 x 0.50 + 1000 x 0.05 + 10 x 8) x 1.10 = 1518, +/- 10%
        assert (pricing.materials_low, pricing.materials_high) == (1366, 1670)

    def test_blockwork_materials_cost_more(self, estimate):
        bricks = calculate_final_pricing(estimate, pricing_inputs(), JobType.BRICKWORK)
        blocks = calculate_final_pricing(estimate, pricing_inputs(), JobType.BLOCKWORK)

        assert unit_cost_for(JobType.BLOCKWORK) > unit_cost_for(JobType.BRICKWORK)
        assert blocks.materials_low > bricks.materials_low
        assert blocks.labour_low == bricks.labour_low

    def test_vat_zero_when_excluded(self, estimate):
        pricing = calculate_final_pricing(estimate, pricing_inputs(include_vat=False), JobType.BRICKWORK)

        assert (pricing.vat_low, pricing.vat_high) == (0, 0)
        assert pricing.total_low == pricing.subtotal_low
        assert_breakdown_adds_up(pricing)

    def test_vat_included(self, estimate):
        pricing = calculate_final_pricing(
            estimate, pricing_inputs(include_vat=True, vat_rate=20), JobType.BRICKWORK
        )

        assert (pricing.vat_low, pricing.vat_high) == (383, 499)
        assert (pricing.total_low, pricing.total_high) == (2299, 2994)
        assert_breakdown_adds_up(pricing)

    @pytest.mark.parametrize("method", list(PricingMethod))
    @pytest.mark.parametrize("include_vat", [False, True])
    @pytest.mark.parametrize("job_type", list(JobType))
    def test_breakdown_always_adds_up(self, estimate, method, include_vat, job_type):
        pricing = calculate_final_pricing(
            estimate,
            pricing_inputs(method=method, include_vat=include_vat, vat_rate=17.5, material_markup=12.5),
            job_type,
        )

        assert_breakdown_adds_up(pricing)


# =============================================================================
# Purity
# =============================================================================


def test_is_idempotent(estimate):
    inputs = pricing_inputs(method=PricingMethod.PER_M2, include_vat=True)

    first = calculate_final_pricing(estimate, inputs, JobType.DEMO_REBUILD)
    second = calculate_final_pricing(estimate, inputs, JobType.DEMO_REBUILD)

    assert first == second


def test_to_dict_uses_camel_case(estimate):
    pricing = calculate_final_pricing(estimate, pricing_inputs(), JobType.BRICKWORK)

    data = pricing.to_dict()

    assert set(data) == {
        "labourLow", "labourHigh", "materialsLow", "materialsHigh",
        "subtotalLow", "subtotalHigh", "vatLow", "vatHigh",
        "totalLow", "totalHigh",
    }


def test_inconsistent_breakdown_rejected():
    with pytest.raises(ValueError):
        FinalPricing(
            labour_low=100, labour_high=200,
            materials_low=50, materials_high=60,
            subtotal_low=151, subtotal_high=260,
            vat_low=0, vat_high=0,
            total_low=151, total_high=260,
        )
