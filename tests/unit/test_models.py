"""Unit tests for BrickQuote models."""

import pytest
from pydantic import ValidationError

from brickquote.models import (
    EstimateResult,
    JobType,
    PricingInputs,
    PricingMethod,
    QuoteProfile,
    SavedJob,
)
from brickquote.models.estimate import check_range_pair, range_midpoint
from tests.fixtures.mock_estimate_data import (
    GARDEN_WALL_ESTIMATE,
    REPOINTING_ESTIMATE,
    ZERO_AREA_ESTIMATE,
    ZERO_PRICE_ESTIMATE,
)


class TestRangePair:
    """Tests for check_range_pair()."""

    def test_accepts_list_and_tuple(self):
        assert check_range_pair([1, 2.5]) == (1, 2.5)
        assert check_range_pair((3, 3)) == (3, 3)

    @pytest.mark.parametrize("value", [
        [1],
        [1, 2, 3],
        "1-2",
        [None, 2],
        [False, True],
        [-1, 2],
        [5, 4],
    ])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            check_range_pair(value)

    def test_midpoint(self):
        assert range_midpoint((20, 30)) == 25


class TestEstimateResult:
    """Tests for EstimateResult."""

    def test_frozen(self, sample_estimate):
        with pytest.raises(ValidationError):
            sample_estimate.area_m2 = 1

    def test_negative_area_rejected(self, sample_estimate_data):
        sample_estimate_data["area_m2"] = -1

        with pytest.raises(ValidationError):
            EstimateResult.model_validate(sample_estimate_data)

    def test_to_dict_omits_missing_image_analysis(self, sample_estimate_data):
        del sample_estimate_data["image_analysis"]

        data = EstimateResult.model_validate(sample_estimate_data).to_dict()

        assert "image_analysis" not in data
        assert data["brick_count_range"] == [540, 620]

    @pytest.mark.parametrize("data, reason", [
        (GARDEN_WALL_ESTIMATE, None),
        (REPOINTING_ESTIMATE, None),
        (ZERO_AREA_ESTIMATE, "zero_area"),
        (ZERO_PRICE_ESTIMATE, "zero_price"),
    ])
    def test_degenerate_reason(self, data, reason):
        estimate = EstimateResult.model_validate(data)

        assert estimate.degenerate_reason == reason
        assert estimate.is_degenerate is (reason is not None)


class TestPricingInputs:
    """Tests for PricingInputs."""

    def test_defaults(self):
        inputs = PricingInputs()

        assert inputs.method == PricingMethod.DAY_RATE
        assert inputs.day_rate == 220
        assert inputs.rate_per_1000 == 500
        assert inputs.rate_per_m2 == 65
        assert inputs.material_markup == 10
        assert inputs.include_vat is False
        assert inputs.vat_rate == 20

    def test_camel_case_aliases(self):
        inputs = PricingInputs.model_validate({
            "method": "per_m2",
            "ratePerM2": 70,
            "includeVAT": True,
        })

        assert inputs.method == PricingMethod.PER_M2
        assert inputs.rate_per_m2 == 70
        assert inputs.to_dict()["includeVAT"] is True

    @pytest.mark.parametrize("field", ["dayRate", "ratePer1000", "ratePerM2"])
    def test_rates_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            PricingInputs.model_validate({field: 0})

    def test_negative_markup_rejected(self):
        with pytest.raises(ValidationError):
            PricingInputs(material_markup=-5)

    @pytest.mark.parametrize("field, value", [
        ("dayRate", float("inf")),
        ("materialMarkup", float("nan")),
        ("vatRate", float("inf")),
    ])
    def test_non_finite_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            PricingInputs.model_validate({field: value})


class TestQuoteProfile:
    """Tests for QuoteProfile."""

    def test_default_pricing_inputs(self, sample_profile):
        inputs = sample_profile.default_pricing_inputs()

        assert inputs.include_vat is True
        assert inputs.day_rate == 220

    def test_not_vat_registered(self):
        assert QuoteProfile().default_pricing_inputs().include_vat is False

    def test_infinite_day_rate_rejected(self):
        with pytest.raises(ValidationError):
            QuoteProfile.model_validate({"defaultDayRate": float("inf")})


class TestSavedJob:
    """Tests for SavedJob."""

    def test_round_trip(self, sample_saved_job):
        data = sample_saved_job.to_dict()

        assert data["id"] == "1718000000000-abc1234"
        assert data["createdAt"].startswith("2024-06-10T09:30:00")
        assert SavedJob.model_validate(data) == sample_saved_job

    def test_job_type_kept(self, sample_saved_job):
        assert sample_saved_job.inputs.job_type == JobType.BRICKWORK
