"""Company profile model for BrickQuote.

Holds the details printed on a quote and the user's default billing setup.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from brickquote.models.pricing import PricingInputs, PricingMethod


DEFAULT_DISCLAIMER = (
    "This is an estimate only and is subject to site survey. Prices may vary "
    "based on actual conditions, material availability, and scope changes."
)


class QuoteProfile(BaseModel):
    """Bricklayer's business profile."""

    company_name: str = Field(default="", alias="companyName")
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
    disclaimer_text: str = Field(default=DEFAULT_DISCLAIMER, alias="disclaimerText")
    default_day_rate: float = Field(default=220.0, gt=0, alias="defaultDayRate")
    default_pricing_method: PricingMethod = Field(
        default=PricingMethod.DAY_RATE,
        alias="defaultPricingMethod"
    )
    material_markup: float = Field(default=10.0, ge=0, alias="materialMarkup")
    vat_registered: bool = Field(default=False, alias="vatRegistered")
    vat_rate: float = Field(default=20.0, ge=0, alias="vatRate")

    def default_pricing_inputs(self) -> PricingInputs:
        """Billing configuration a new quote starts from.

        VAT is only added for VAT-registered businesses.
        """
        return PricingInputs(
            method=self.default_pricing_method,
            day_rate=self.default_day_rate,
            material_markup=self.material_markup,
            include_vat=self.vat_registered,
            vat_rate=self.vat_rate,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase storage format."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)

    class Config:
        populate_by_name = True
        allow_inf_nan = False
