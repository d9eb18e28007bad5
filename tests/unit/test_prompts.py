"""Unit tests for prompt building and image references."""

import pytest

from brickquote.config.errors import InvalidInput
from brickquote.models.job import JobInputs, JobType
from brickquote.services.image_source import ImageSource, get_media_type
from brickquote.services.prompts import JOB_CONTEXT, build_user_message
from tests.fixtures.mock_estimate_data import DEMO_REBUILD_INPUTS, REPOINTING_INPUTS


class TestBuildUserMessage:
    """Tests for build_user_message()."""

    def test_lists_inputs(self, sample_job_inputs):
        message = build_user_message(sample_job_inputs)

        assert "- Job Type: Brickwork" in message
        assert "- Anchor: length=4.5 meters" in message
        assert "- Difficulty: Standard" in message
        assert "- Has Openings: No" in message
        assert "Customer Description" not in message

    def test_includes_description(self):
        message = build_user_message(JobInputs.model_validate(REPOINTING_INPUTS))

        assert "Customer Description: Front garden wall" in message
        assert JOB_CONTEXT[JobType.REPOINTING] in message

    def test_openings(self):
        message = build_user_message(JobInputs.model_validate(DEMO_REBUILD_INPUTS))

        assert "- Has Openings: Yes" in message
        assert "DEMOLITION" in message

    def test_every_job_type_has_context(self):
        assert set(JOB_CONTEXT) == set(JobType)

    def test_asks_for_json_shape(self, sample_job_inputs):
        message = build_user_message(sample_job_inputs)

        assert '"recommended_price_gbp_range": [number, number]' in message


class TestImageSource:
    """Tests for ImageSource."""

    def test_base64_becomes_data_uri(self):
        image = ImageSource(base64="AAAA")

        assert image.to_image_url() == "data:image/jpeg;base64,AAAA"

    def test_existing_data_uri_prefix_replaced(self):
        image = ImageSource(base64="data:image/png;base64,AAAA", media_type="image/png")

        assert image.to_image_url() == "data:image/png;base64,AAAA"

    def test_url_used_as_is(self):
        image = ImageSource(url="https://storage.example.com/jobs/wall.jpg")

        assert image.to_image_url() == "https://storage.example.com/jobs/wall.jpg"

    def test_base64_preferred_over_url(self):
        image = ImageSource(base64="AAAA", url="https://example.com/wall.jpg")

        assert image.to_image_url().startswith("data:")

    def test_missing_image(self):
        with pytest.raises(InvalidInput) as exc_info:
            ImageSource().to_image_url()

        assert exc_info.value.message == "Image is required (base64 or URL)"

    @pytest.mark.parametrize("uri,media_type", [
        ("wall.png", "image/png"),
        ("https://example.com/wall.WEBP?token=1", "image/webp"),
        ("file:///photos/IMG_0001.jpg", "image/jpeg"),
        ("no-extension", "image/jpeg"),
    ])
    def test_get_media_type(self, uri, media_type):
        assert get_media_type(uri) == media_type
