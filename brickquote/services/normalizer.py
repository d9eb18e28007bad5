"""AI response normalizer.

Turns raw model text into a canonical EstimateResult:

    raw text -> JSON -> structural validation -> degeneracy check
             -> (fallback estimate if degenerate) -> EstimateResult

Degenerate answers are common when the photo is ambiguous and are resolved
silently; text that is not an estimate at all is a real error.
"""

import json
from typing import Any

import structlog

from brickquote.config.errors import UnestimatableImage, UnparsableResponse
from brickquote.models.estimate import EstimateResult
from brickquote.models.job import JobInputs
from brickquote.services.fallback_estimator import estimate_from_inputs_only
from brickquote.validators.estimate_validator import validate_estimate_result

logger = structlog.get_logger(__name__)


def strip_code_fence(content: str) -> str:
    """Remove a surrounding ```json ... ``` block, if any."""
    content = content.strip()
    if content.startswith("```json"):
        content = content[7:]
    if content.startswith("```"):
        content = content[3:]
    if content.endswith("```"):
        content = content[:-3]
    return content.strip()


def parse_response_json(raw_text: str) -> Any:
    """Parse model output as JSON.

    Raises:
        UnparsableResponse: If the text is not valid JSON.
    """
    if not isinstance(raw_text, str) or not raw_text.strip():
        raise UnparsableResponse(details={"parse_error": "empty response"})

    try:
        return json.loads(strip_code_fence(raw_text))
    except json.JSONDecodeError as e:
        logger.warning("estimate_unparsable", error=str(e), raw_content=raw_text[:200])
        raise UnparsableResponse(
            details={
                "parse_error": str(e),
                "raw_content": raw_text[:500]
            }
        )


def normalize_estimate_response(raw_text: str, inputs: JobInputs) -> EstimateResult:
    """Normalize raw model output into a usable estimate.

    Args:
        raw_text: Content returned by the vision model
        inputs: The validated inputs the request was made with

    Returns:
        The model's estimate unchanged when usable, otherwise the
        dimension-only fallback estimate.

    Raises:
        UnparsableResponse: If raw_text is not JSON.
        MalformedResponse: If the JSON is not shaped like an estimate.
    """
    parsed = parse_response_json(raw_text)

    try:
        estimate = validate_estimate_result(parsed)
    except UnestimatableImage as e:
        logger.warning(
            "fallback_estimate_used",
            reason=e.reason,
            job_type=inputs.job_type.value,
            anchor_type=inputs.anchor_type.value,
        )
        return estimate_from_inputs_only(inputs)

    logger.info(
        "estimate_normalized",
        area_m2=estimate.area_m2,
        price_range=list(estimate.recommended_price_gbp_range),
    )
    return estimate
