"""Estimate response validation.

Deserializes a parsed model response into a typed EstimateResult and decides
whether it is usable. Two distinct failures:

- MalformedResponse: the object is not shaped like an estimate (fatal for
  the attempt).
- UnestimatableImage: well-formed but degenerate (all zeros); callers recover
  with the dimension-only fallback.
"""

from typing import Any, List

from pydantic import ValidationError as PydanticValidationError
import structlog

from brickquote.config.errors import MalformedResponse, UnestimatableImage
from brickquote.models.estimate import EstimateResult

logger = structlog.get_logger(__name__)

DEGENERATE_MESSAGES = {
    "zero_area": (
        "Could not estimate from this image. Please try a clearer photo "
        "showing the work area, or adjust your reference dimension."
    ),
    "zero_price": "Could not calculate pricing. Please try a different photo or check your inputs.",
}


def _format_errors(exc: PydanticValidationError) -> List[str]:
    """Flatten pydantic errors into 'a.b: message' strings."""
    return [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]


def parse_estimate_result(candidate: Any) -> EstimateResult:
    """Structural check only.

    Args:
        candidate: Parsed JSON of unknown shape

    Returns:
        Typed EstimateResult (possibly degenerate)

    Raises:
        MalformedResponse: If a required field is absent or mis-shaped.
    """
    if not isinstance(candidate, dict):
        raise MalformedResponse(
            "Invalid response: expected a JSON object",
            errors=[f"got {type(candidate).__name__}"]
        )

    try:
        return EstimateResult.model_validate(candidate)
    except PydanticValidationError as e:
        errors = _format_errors(e)
        logger.warning("estimate_malformed", errors=errors, keys=list(candidate.keys()))
        raise MalformedResponse(
            f"Invalid response: {errors[0]}",
            errors=errors
        )


def is_degenerate(estimate: EstimateResult) -> bool:
    """True if the estimate must never be shown to a user."""
    return estimate.is_degenerate


def validate_estimate_result(candidate: Any) -> EstimateResult:
    """Validate a parsed model response.

    Args:
        candidate: Parsed JSON of unknown shape

    Returns:
        A structurally valid, non-degenerate EstimateResult

    Raises:
        MalformedResponse: If the shape is wrong.
        UnestimatableImage: If the estimate is degenerate.
    """
    estimate = parse_estimate_result(candidate)

    reason = estimate.degenerate_reason
    if reason is not None:
        raise UnestimatableImage(DEGENERATE_MESSAGES[reason], reason=reason)

    return estimate
