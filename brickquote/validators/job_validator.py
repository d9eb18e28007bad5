"""Job input validation.

Runs before any network call so bad inputs never reach the vision model.
"""

from typing import Any, Mapping, Union

from pydantic import ValidationError as PydanticValidationError
import structlog

from brickquote.config.errors import InvalidInput
from brickquote.models.job import JobInputs, MAX_ANCHOR_VALUE_M

logger = structlog.get_logger(__name__)

# pydantic field name -> wire name, for error reporting
_FIELD_ALIASES = {
    name: (info.alias or name) for name, info in JobInputs.model_fields.items()
}


def validate_job_inputs(data: Union[JobInputs, Mapping[str, Any]]) -> JobInputs:
    """Parse and validate job inputs.

    Args:
        data: camelCase mapping from a request body, or an existing JobInputs

    Returns:
        Frozen JobInputs

    Raises:
        InvalidInput: If any field is missing or out of range.
    """
    if isinstance(data, JobInputs):
        return data

    if not isinstance(data, Mapping):
        raise InvalidInput("Invalid inputs: expected an object")

    try:
        return JobInputs.model_validate(dict(data))
    except PydanticValidationError as e:
        errors = []
        for err in e.errors():
            loc = err["loc"]
            name = _FIELD_ALIASES.get(loc[0], loc[0]) if loc else None
            errors.append({"field": name, "message": err["msg"]})

        logger.info("job_inputs_rejected", errors=errors)
        first = errors[0]
        raise InvalidInput(
            f"Invalid inputs: {first['field']}: {first['message']}",
            field=first["field"],
            details={"errors": errors}
        )


def validate_anchor_value(value: Any) -> float:
    """Parse the anchor dimension as typed into a form field.

    Args:
        value: Raw text (or number) entered by the user, in metres

    Returns:
        The anchor value as a float

    Raises:
        InvalidInput: With a user-facing message.
    """
    if value is None or str(value).strip() == "":
        raise InvalidInput("Anchor dimension is required", field="anchorValue")

    try:
        parsed = float(str(value).strip())
    except ValueError:
        raise InvalidInput("Please enter a valid number", field="anchorValue")

    if parsed != parsed:
        raise InvalidInput("Please enter a valid number", field="anchorValue")

    if parsed <= 0:
        raise InvalidInput("Value must be greater than 0", field="anchorValue")

    if parsed > MAX_ANCHOR_VALUE_M:
        raise InvalidInput(
            "Value seems too large. Please enter in meters.",
            field="anchorValue"
        )

    return parsed
