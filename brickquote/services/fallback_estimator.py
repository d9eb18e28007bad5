"""Dimension-only fallback estimator.

Produces a usable, non-zero estimate from the job inputs alone, for when the
vision model returns nothing usable. Numerically independent of any AI call.

Method:
1. Work area from the single measured dimension (assumed wall height, or an
   assumed length of 1.5x the measured height), less openings, clamped.
2. One variance fraction per difficulty, applied as +/- to every base
   quantity so all ranges share the same spread.
3. Quantities from fixed per-m2 constants, price from a per-m2 job-type rate.
"""

import math
from typing import Dict, List, Tuple

import structlog

from brickquote.models.estimate import EstimateResult, MaterialsEstimate
from brickquote.models.job import AnchorType, Difficulty, JobInputs, JobType

logger = structlog.get_logger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Area derivation
ASSUMED_WALL_HEIGHT_M = 2.1
ASSUMED_LENGTH_TO_HEIGHT_RATIO = 1.5
OPENINGS_REDUCTION = 0.15
MIN_AREA_M2 = 2.0
MAX_AREA_M2 = 100.0

# Symmetric spread applied to every quantity
VARIANCE_BY_DIFFICULTY: Dict[Difficulty, float] = {
    Difficulty.EASY: 0.15,
    Difficulty.STANDARD: 0.25,
    Difficulty.TRICKY: 0.35,
}

# Per-m2 quantities (half-brick wall, stretcher bond)
BRICKS_PER_M2 = 60
SAND_KG_PER_M2 = 50
M2_PER_CEMENT_BAG = 2.5
LABOUR_HOURS_PER_M2 = 4

# Baseline all-in price per m2. Repointing buys no new units; demo+rebuild
# carries demolition and disposal on top of a new build.
PRICE_PER_M2_BY_JOB_TYPE: Dict[JobType, float] = {
    JobType.REPOINTING: 80.0,
    JobType.BRICKWORK: 130.0,
    JobType.BLOCKWORK: 130.0,
    JobType.DEMO_REBUILD: 180.0,
}

STANDARD_EXCLUSIONS = [
    "Scaffolding (if required)",
    "Footings and foundations",
    "Skip hire and waste removal",
    "Planning permission and building control fees",
]


# =============================================================================
# HELPERS
# =============================================================================


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _spread(base: float, variance: float, floor: int = 0) -> Tuple[int, int]:
    """Round base x (1 - v) and base x (1 + v), keeping low >= floor."""
    low = max(floor, _round_half_up(base * (1 - variance)))
    high = max(low, _round_half_up(base * (1 + variance)))
    return (low, high)


def _format_metres(value: float) -> str:
    return f"{value:g}m"


def estimate_area(inputs: JobInputs) -> Tuple[float, List[str]]:
    """Approximate work area from the anchor dimension.

    Args:
        inputs: Validated job inputs

    Returns:
        (area in m2, assumptions explaining how it was derived)
    """
    anchor = inputs.anchor_value
    assumptions = []

    if inputs.anchor_type == AnchorType.LENGTH:
        area = anchor * ASSUMED_WALL_HEIGHT_M
        assumptions.append(
            f"Area derived from the measured length of {_format_metres(anchor)} "
            f"with an assumed wall height of {_format_metres(ASSUMED_WALL_HEIGHT_M)}"
        )
    else:
        length = anchor * ASSUMED_LENGTH_TO_HEIGHT_RATIO
        area = anchor * length
        assumptions.append(
            f"Area derived from the measured height of {_format_metres(anchor)} "
            f"with an assumed length of {_format_metres(round(length, 2))}"
        )

    if inputs.has_openings:
        area *= 1 - OPENINGS_REDUCTION
        assumptions.append(
            f"Area reduced by {OPENINGS_REDUCTION:.0%} for door and window openings"
        )

    clamped = min(max(area, MIN_AREA_M2), MAX_AREA_M2)
    if clamped != area:
        assumptions.append(
            f"Area limited to the {MIN_AREA_M2:g}-{MAX_AREA_M2:g} m² range"
        )

    return clamped, assumptions


# =============================================================================
# FALLBACK ESTIMATE
# =============================================================================


def estimate_from_inputs_only(inputs: JobInputs) -> EstimateResult:
    """Build an estimate without photo evidence.

    Never fails for validated inputs and never returns a degenerate result:
    the area is clamped to at least 2 m2, so every range is non-zero.

    Args:
        inputs: Validated job inputs

    Returns:
        Fallback EstimateResult
    """
    area, area_assumptions = estimate_area(inputs)
    variance = VARIANCE_BY_DIFFICULTY[inputs.difficulty]

    cement_bags = max(1.0, area / M2_PER_CEMENT_BAG)
    price = area * PRICE_PER_M2_BY_JOB_TYPE[inputs.job_type]

    other = []
    if inputs.job_type == JobType.DEMO_REBUILD:
        other = ["Skip hire", "Scaffolding possible"]

    estimate = EstimateResult(
        area_m2=round(area, 1),
        brick_count_range=_spread(area * BRICKS_PER_M2, variance),
        materials=MaterialsEstimate(
            sand_kg_range=_spread(area * SAND_KG_PER_M2, variance),
            cement_bags_range=_spread(cement_bags, variance, floor=1),
            other=other,
        ),
        labour_hours_range=_spread(area * LABOUR_HOURS_PER_M2, variance),
        recommended_price_gbp_range=_spread(price, variance),
        assumptions=area_assumptions + [
            "Standard UK brick (215x102.5x65mm) with 10mm mortar joints",
            f"{BRICKS_PER_M2} bricks per m² (half-brick wall, stretcher bond)",
            f"Ranges widened by ±{variance:.0%} for {inputs.difficulty.value} difficulty",
            "Photo analysis was inconclusive, so quantities are based on the measured dimension only",
        ],
        exclusions=list(STANDARD_EXCLUSIONS),
        notes=[
            "Dimension-only estimate: the photo could not be used to measure the work area",
            "A site visit is recommended to confirm dimensions before quoting",
        ],
    )

    logger.info(
        "fallback_estimate_built",
        job_type=inputs.job_type.value,
        anchor_type=inputs.anchor_type.value,
        anchor_value=inputs.anchor_value,
        area_m2=estimate.area_m2,
        variance=variance,
    )

    return estimate
