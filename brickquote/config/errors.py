"""BrickQuote error handling.

Custom exceptions and error codes for the estimate and pricing pipeline.
"""

from typing import Optional, Dict, Any, List


# Error Codes
class ErrorCode:
    """Error code constants."""

    # Input Errors
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_FIELD = "MISSING_FIELD"

    # Provider Errors
    PROVIDER_ERROR = "PROVIDER_ERROR"

    # Response Errors
    UNPARSABLE_RESPONSE = "UNPARSABLE_RESPONSE"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    UNESTIMATABLE_IMAGE = "UNESTIMATABLE_IMAGE"

    # Storage Errors
    STORAGE_ERROR = "STORAGE_ERROR"
    JOB_NOT_FOUND = "JOB_NOT_FOUND"

    # Export Errors
    PDF_GENERATION_FAILED = "PDF_GENERATION_FAILED"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class BrickQuoteError(Exception):
    """Base exception for BrickQuote errors.

    Provides structured error information for API responses.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize BrickQuoteError.

        Args:
            code: Error code from ErrorCode constants
            message: Human-readable error message
            details: Additional error context
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API response.

        Returns:
            Dictionary with code, message, and details.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class InvalidInput(BrickQuoteError):
    """Job inputs failed validation before any estimate was attempted."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.INVALID_INPUT,
            message=message,
            details={**(details or {}), "field": field} if field else details
        )
        self.field = field


class ProviderError(BrickQuoteError):
    """The vision model call itself failed (HTTP error, network, credentials)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=ErrorCode.PROVIDER_ERROR,
            message=message,
            details={**(details or {}), "status_code": status_code}
        )
        self.status_code = status_code


class UnparsableResponse(BrickQuoteError):
    """The provider returned text that is not JSON."""

    def __init__(self, message: str = "Failed to parse AI response. Please try again.", details: Optional[Dict] = None):
        super().__init__(
            code=ErrorCode.UNPARSABLE_RESPONSE,
            message=message,
            details=details
        )


class MalformedResponse(BrickQuoteError):
    """The response parsed as JSON but is not shaped like an estimate."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(
            code=ErrorCode.MALFORMED_RESPONSE,
            message=message,
            details={"errors": errors or []}
        )
        self.errors = errors or []


class UnestimatableImage(BrickQuoteError):
    """Well-formed estimate with no usable numbers.

    Never surfaced to the user: the normalizer resolves it with the
    dimension-only fallback estimate.
    """

    def __init__(self, message: str, reason: str):
        super().__init__(
            code=ErrorCode.UNESTIMATABLE_IMAGE,
            message=message,
            details={"reason": reason}
        )
        self.reason = reason


class StorageError(BrickQuoteError):
    """Persistence-specific error."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.STORAGE_ERROR,
        job_id: Optional[str] = None,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "job_id": job_id}
        )
        self.job_id = job_id
