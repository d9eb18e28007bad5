"""Input and response validation."""

from brickquote.validators.estimate_validator import (
    is_degenerate,
    parse_estimate_result,
    validate_estimate_result,
)
from brickquote.validators.job_validator import validate_anchor_value, validate_job_inputs

__all__ = [
    "is_degenerate",
    "parse_estimate_result",
    "validate_anchor_value",
    "validate_estimate_result",
    "validate_job_inputs",
]
