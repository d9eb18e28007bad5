"""Estimate Pydantic models for BrickQuote.

This module defines the canonical estimate produced by the estimation stage,
either parsed from the vision model or computed by the fallback estimator.
Every quantity is a (low, high) range.
"""

import math
from typing import Any, List, Optional, Tuple, Union

from pydantic import BaseModel, Field, field_validator


Number = Union[int, float]
RangePair = Tuple[Number, Number]


# =============================================================================
# RANGE HELPERS
# =============================================================================


def _is_number(value: Any) -> bool:
    """True for finite int/float values; bool, NaN and infinity are not quantities."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def check_range_pair(value: Any) -> RangePair:
    """Validate a raw value as an ordered, non-negative numeric pair.

    Accepts lists (JSON arrays) and tuples.

    Raises:
        ValueError: If the value is not a 2-element numeric pair, has a
            negative bound, or has low > high.
    """
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError("must be a 2-element [low, high] pair")
    low, high = value
    if not _is_number(low) or not _is_number(high):
        raise ValueError("range bounds must be finite numbers")
    if low < 0 or high < 0:
        raise ValueError(f"range bounds must be non-negative, got [{low}, {high}]")
    if low > high:
        raise ValueError(f"range must be low <= high, got [{low}, {high}]")
    return (low, high)


def range_midpoint(pair: RangePair) -> float:
    """Average of a (low, high) range."""
    return (pair[0] + pair[1]) / 2


# =============================================================================
# ESTIMATE MODELS
# =============================================================================


class MaterialsEstimate(BaseModel):
    """Mortar materials plus free-text extras (skip hire, wall ties, ...)."""

    sand_kg_range: RangePair = Field(..., description="Building sand in kg")
    cement_bags_range: RangePair = Field(..., description="25kg cement bags")
    other: List[str] = Field(default_factory=list, description="Other materials or plant")

    @field_validator("sand_kg_range", "cement_bags_range", mode="before")
    @classmethod
    def validate_range(cls, value: Any) -> RangePair:
        return check_range_pair(value)

    class Config:
        frozen = True


class EstimateResult(BaseModel):
    """Canonical estimate for a single job.

    Produced once per request (vision model or fallback), immutable, and
    persisted verbatim inside a saved job record.
    """

    area_m2: float = Field(..., ge=0, description="Work area in square metres")
    brick_count_range: RangePair = Field(..., description="Bricks (or blocks) required")
    materials: MaterialsEstimate
    labour_hours_range: RangePair = Field(..., description="Labour hours")
    recommended_price_gbp_range: RangePair = Field(..., description="Suggested price in GBP")
    assumptions: List[str] = Field(default_factory=list)
    exclusions: List[str] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)
    image_analysis: Optional[str] = Field(
        default=None,
        description="Narrative of what the model saw in the photo"
    )

    @field_validator("area_m2", mode="before")
    @classmethod
    def validate_area(cls, value: Any) -> float:
        if not _is_number(value):
            raise ValueError("area_m2 must be a finite number")
        return value

    @field_validator(
        "brick_count_range",
        "labour_hours_range",
        "recommended_price_gbp_range",
        mode="before",
    )
    @classmethod
    def validate_range(cls, value: Any) -> RangePair:
        return check_range_pair(value)

    @property
    def degenerate_reason(self) -> Optional[str]:
        """Why the estimate carries no usable numbers, or None if it does.

        "zero_area" for no area and no bricks, "zero_price" for a zero
        price range.
        """
        if self.area_m2 == 0 and tuple(self.brick_count_range) == (0, 0):
            return "zero_area"
        if tuple(self.recommended_price_gbp_range) == (0, 0):
            return "zero_price"
        return None

    @property
    def is_degenerate(self) -> bool:
        return self.degenerate_reason is not None

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary (ranges as lists)."""
        return self.model_dump(mode="json", exclude_none=True)

    class Config:
        frozen = True
