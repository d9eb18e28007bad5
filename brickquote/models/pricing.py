"""Pricing models for BrickQuote.

PricingInputs is the user's billing configuration; FinalPricing is the
rounded quote derived from an estimate and those inputs.
"""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, Field, model_validator


class PricingMethod(str, Enum):
    """How the bricklayer bills labour."""

    DAY_RATE = "day_rate"
    PER_1000_BRICKS = "per_1000_bricks"
    PER_M2 = "per_m2"


class PricingInputs(BaseModel):
    """User billing configuration.

    Only the rate matching ``method`` is used for labour; the others are kept
    so switching method in the UI does not lose what the user typed.
    """

    method: PricingMethod = Field(default=PricingMethod.DAY_RATE)
    day_rate: float = Field(default=220.0, gt=0, alias="dayRate", description="GBP per 8-hour day")
    rate_per_1000: float = Field(default=500.0, gt=0, alias="ratePer1000", description="GBP per 1000 bricks laid")
    rate_per_m2: float = Field(default=65.0, gt=0, alias="ratePerM2", description="GBP per square metre")
    material_markup: float = Field(default=10.0, ge=0, alias="materialMarkup", description="Percentage added to materials")
    include_vat: bool = Field(default=False, alias="includeVAT")
    vat_rate: float = Field(default=20.0, ge=0, alias="vatRate", description="VAT percentage")

    def to_dict(self) -> Dict:
        """Convert to the camelCase wire format."""
        return self.model_dump(by_alias=True, mode="json")

    class Config:
        populate_by_name = True
        frozen = True
        allow_inf_nan = False


class FinalPricing(BaseModel):
    """Fully broken-down quote in whole GBP.

    A pure projection of (EstimateResult, PricingInputs); recomputed on
    demand and never persisted on its own.
    """

    labour_low: int = Field(..., ge=0, alias="labourLow")
    labour_high: int = Field(..., ge=0, alias="labourHigh")
    materials_low: int = Field(..., ge=0, alias="materialsLow")
    materials_high: int = Field(..., ge=0, alias="materialsHigh")
    subtotal_low: int = Field(..., ge=0, alias="subtotalLow")
    subtotal_high: int = Field(..., ge=0, alias="subtotalHigh")
    vat_low: int = Field(..., ge=0, alias="vatLow")
    vat_high: int = Field(..., ge=0, alias="vatHigh")
    total_low: int = Field(..., ge=0, alias="totalLow")
    total_high: int = Field(..., ge=0, alias="totalHigh")

    @model_validator(mode="after")
    def validate_totals(self) -> "FinalPricing":
        """Ensure the breakdown adds up and every pair is ordered."""
        if self.subtotal_low != self.labour_low + self.materials_low or \
                self.subtotal_high != self.labour_high + self.materials_high:
            raise ValueError("subtotal must equal labour + materials")
        if self.total_low != self.subtotal_low + self.vat_low or \
                self.total_high != self.subtotal_high + self.vat_high:
            raise ValueError("total must equal subtotal + VAT")
        for name in ("labour", "materials", "subtotal", "vat", "total"):
            if getattr(self, f"{name}_low") > getattr(self, f"{name}_high"):
                raise ValueError(f"{name} range must be low <= high")
        return self

    def to_dict(self) -> Dict[str, int]:
        """Convert to the camelCase wire format."""
        return self.model_dump(by_alias=True)

    class Config:
        populate_by_name = True
        frozen = True
