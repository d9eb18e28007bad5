"""Estimation service for BrickQuote.

Runs one estimate request end to end: validate inputs, build prompts, call
the vision model and normalize its answer.
"""

import time
from typing import Any, Mapping, Optional, Union

import structlog

from brickquote.models.estimate import EstimateResult
from brickquote.models.job import JobInputs
from brickquote.services.image_source import ImageSource
from brickquote.services.llm_service import LLMService
from brickquote.services.normalizer import normalize_estimate_response
from brickquote.services.prompts import SYSTEM_MESSAGE, build_user_message
from brickquote.validators.job_validator import validate_job_inputs

logger = structlog.get_logger()


class EstimationService:
    """Produces an EstimateResult for a job photo."""

    def __init__(self, llm_service: Optional[LLMService] = None):
        self._llm_service = llm_service

    @property
    def llm_service(self) -> LLMService:
        """Get LLMService (lazy initialization)."""
        if self._llm_service is None:
            self._llm_service = LLMService()
        return self._llm_service

    async def estimate(
        self,
        inputs: Union[JobInputs, Mapping[str, Any]],
        image: ImageSource
    ) -> EstimateResult:
        """Estimate a job from its photo.

        Inputs and image are checked before any network call.

        Args:
            inputs: Job inputs (validated here if given as a mapping)
            image: Job photo

        Returns:
            Canonical EstimateResult (model answer or fallback)

        Raises:
            InvalidInput: Bad inputs or no image.
            ProviderError: The vision call failed.
            UnparsableResponse: The model did not return JSON.
            MalformedResponse: The JSON is not an estimate.
        """
        job_inputs = validate_job_inputs(inputs)
        image_url = image.to_image_url()

        start_time = time.perf_counter()
        logger.info(
            "estimate_requested",
            job_type=job_inputs.job_type.value,
            anchor_type=job_inputs.anchor_type.value,
            anchor_value=job_inputs.anchor_value,
            difficulty=job_inputs.difficulty.value,
            inline_image=bool(image.base64),
        )

        raw_text = await self.llm_service.generate_estimate(
            system_prompt=SYSTEM_MESSAGE,
            user_message=build_user_message(job_inputs),
            image_url=image_url,
        )
        estimate = normalize_estimate_response(raw_text, job_inputs)

        logger.info(
            "estimate_completed",
            area_m2=estimate.area_m2,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return estimate
