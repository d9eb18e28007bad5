"""Pricing engine for BrickQuote.

Converts an estimate plus the user's billing preferences into a range-based
quote. Low and high are computed as separate scenarios from start to finish;
bounds are never cross-mixed.
"""

import math
from typing import Dict, Tuple

from brickquote.models.estimate import EstimateResult, range_midpoint
from brickquote.models.job import JobType
from brickquote.models.pricing import FinalPricing, PricingInputs, PricingMethod


# =============================================================================
# CONSTANTS
# =============================================================================

HOURS_PER_DAY = 8

# Approximate UK material prices (GBP)
BRICK_UNIT_COST = 0.50
BLOCK_UNIT_COST = 1.50
SAND_COST_PER_KG = 0.05
CEMENT_BAG_COST = 8.0

UNIT_COST_BY_JOB_TYPE: Dict[JobType, float] = {
    JobType.BLOCKWORK: BLOCK_UNIT_COST,
}

# Synthetic bands where the estimate carries no range of its own
PER_M2_LABOUR_BAND = 0.05
MATERIALS_BAND = 0.10


# =============================================================================
# HELPERS
# =============================================================================


def _round_gbp(value: float) -> int:
    """Round half-up to whole pounds."""
    return int(math.floor(value + 0.5))


def unit_cost_for(job_type: JobType) -> float:
    """Cost of one brick or block for the job type."""
    return UNIT_COST_BY_JOB_TYPE.get(job_type, BRICK_UNIT_COST)


def calculate_labour_cost(estimate: EstimateResult, pricing: PricingInputs) -> Tuple[float, float]:
    """Labour (low, high) before rounding, by billing method.

    Each branch prices a range: the estimate's own hour or brick range, or a
    +/-5% band around area x rate for per-m2 billing.
    """
    if pricing.method == PricingMethod.DAY_RATE:
        hours_low, hours_high = estimate.labour_hours_range
        return (
            hours_low / HOURS_PER_DAY * pricing.day_rate,
            hours_high / HOURS_PER_DAY * pricing.day_rate,
        )

    if pricing.method == PricingMethod.PER_1000_BRICKS:
        bricks_low, bricks_high = estimate.brick_count_range
        return (
            bricks_low / 1000 * pricing.rate_per_1000,
            bricks_high / 1000 * pricing.rate_per_1000,
        )

    base = estimate.area_m2 * pricing.rate_per_m2
    return (base * (1 - PER_M2_LABOUR_BAND), base * (1 + PER_M2_LABOUR_BAND))


def calculate_materials_cost(
    estimate: EstimateResult,
    pricing: PricingInputs,
    job_type: JobType
) -> Tuple[float, float]:
    """Materials (low, high) before rounding.

    Priced from midpoint quantities, marked up, then given a +/-10% band.
    """
    base = (
        range_midpoint(estimate.brick_count_range) * unit_cost_for(job_type)
        + range_midpoint(estimate.materials.sand_kg_range) * SAND_COST_PER_KG
        + range_midpoint(estimate.materials.cement_bags_range) * CEMENT_BAG_COST
    )
    marked_up = base * (1 + pricing.material_markup / 100)
    return (marked_up * (1 - MATERIALS_BAND), marked_up * (1 + MATERIALS_BAND))


# =============================================================================
# FINAL PRICING
# =============================================================================


def calculate_final_pricing(
    estimate: EstimateResult,
    pricing: PricingInputs,
    job_type: JobType
) -> FinalPricing:
    """Price an estimate.

    Arithmetic stays in floating point until the end. Labour, materials and
    VAT are each rounded once; subtotal and total are sums of the rounded
    parts so the printed breakdown always adds up.

    Args:
        estimate: Canonical estimate
        pricing: User billing configuration
        job_type: Job type (drives the brick/block unit cost)

    Returns:
        FinalPricing in whole GBP
    """
    labour_low, labour_high = calculate_labour_cost(estimate, pricing)
    materials_low, materials_high = calculate_materials_cost(estimate, pricing, job_type)

    subtotal_low = labour_low + materials_low
    subtotal_high = labour_high + materials_high

    if pricing.include_vat:
        vat_low = subtotal_low * pricing.vat_rate / 100
        vat_high = subtotal_high * pricing.vat_rate / 100
    else:
        vat_low = vat_high = 0.0

    labour = (_round_gbp(labour_low), _round_gbp(labour_high))
    materials = (_round_gbp(materials_low), _round_gbp(materials_high))
    vat = (_round_gbp(vat_low), _round_gbp(vat_high))
    subtotal = (labour[0] + materials[0], labour[1] + materials[1])

    return FinalPricing(
        labour_low=labour[0],
        labour_high=labour[1],
        materials_low=materials[0],
        materials_high=materials[1],
        subtotal_low=subtotal[0],
        subtotal_high=subtotal[1],
        vat_low=vat[0],
        vat_high=vat[1],
        total_low=subtotal[0] + vat[0],
        total_high=subtotal[1] + vat[1],
    )
