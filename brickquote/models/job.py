"""Job models for BrickQuote.

JobInputs describes one estimate request; SavedJob is the record stored
once the user keeps an estimate.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from brickquote.models.estimate import EstimateResult
from brickquote.models.pricing import PricingInputs


# =============================================================================
# ENUMS
# =============================================================================


class JobType(str, Enum):
    """Kind of masonry work."""

    BRICKWORK = "Brickwork"
    BLOCKWORK = "Blockwork"
    REPOINTING = "Repointing"
    DEMO_REBUILD = "Demo+Rebuild"


class AnchorType(str, Enum):
    """Which dimension the user measured on site."""

    LENGTH = "length"
    HEIGHT = "height"


class Difficulty(str, Enum):
    """Site difficulty; drives the width of every estimate range."""

    EASY = "Easy"
    STANDARD = "Standard"
    TRICKY = "Tricky"


MAX_ANCHOR_VALUE_M = 100.0


# =============================================================================
# JOB INPUTS
# =============================================================================


class JobInputs(BaseModel):
    """User-supplied description of a job, immutable once sent."""

    job_type: JobType = Field(..., alias="jobType")
    anchor_type: AnchorType = Field(..., alias="anchorType")
    anchor_value: float = Field(
        ...,
        gt=0,
        le=MAX_ANCHOR_VALUE_M,
        alias="anchorValue",
        description="Measured dimension in metres"
    )
    difficulty: Difficulty
    has_openings: bool = Field(..., alias="hasOpenings", description="Doors/windows in the wall")
    job_description: Optional[str] = Field(default=None, alias="jobDescription")
    pricing: Optional[PricingInputs] = None
    photo_uri: Optional[str] = Field(default=None, alias="photoUri")
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")

    @field_validator("anchor_value", mode="before")
    @classmethod
    def reject_bool(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("anchorValue must be a number")
        return value

    @field_validator("job_description")
    @classmethod
    def strip_description(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire format."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    class Config:
        populate_by_name = True
        frozen = True
        allow_inf_nan = False


# =============================================================================
# SAVED JOB
# =============================================================================


class SavedJob(BaseModel):
    """A kept estimate.

    Stores the inputs and estimate verbatim plus the pricing inputs the user
    last chose; the final pricing is always recomputed from these.
    """

    id: str
    user_id: Optional[str] = Field(default=None, alias="userId")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt"
    )
    inputs: JobInputs
    outputs: EstimateResult
    photo_url: Optional[str] = Field(default=None, alias="photoUrl")
    pricing: Optional[PricingInputs] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase storage format."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    class Config:
        populate_by_name = True
