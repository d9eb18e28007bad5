"""BrickQuote data models."""

from brickquote.models.estimate import EstimateResult, MaterialsEstimate, RangePair
from brickquote.models.job import (
    AnchorType,
    Difficulty,
    JobInputs,
    JobType,
    SavedJob,
)
from brickquote.models.pricing import FinalPricing, PricingInputs, PricingMethod
from brickquote.models.profile import QuoteProfile

__all__ = [
    "AnchorType",
    "Difficulty",
    "EstimateResult",
    "FinalPricing",
    "JobInputs",
    "JobType",
    "MaterialsEstimate",
    "PricingInputs",
    "PricingMethod",
    "QuoteProfile",
    "RangePair",
    "SavedJob",
]
