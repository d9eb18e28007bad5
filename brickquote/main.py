"""Cloud Function entry points for BrickQuote.

Provides HTTP endpoints for:
- Estimating a job from a photo
- Pricing an estimate with the user's billing method
- Saving, listing and deleting jobs
- Exporting a PDF quote
"""

import asyncio
import base64
import json
import logging
from typing import Any, Dict

import structlog
from firebase_functions import https_fn, options
from firebase_admin import initialize_app

from brickquote.config.settings import settings
from brickquote.config.errors import (
    BrickQuoteError,
    ErrorCode,
    InvalidInput,
    MalformedResponse,
    StorageError,
)
from brickquote.models.job import JobType, SavedJob
from brickquote.models.pricing import PricingInputs
from brickquote.services.estimation_service import EstimationService
from brickquote.services.image_source import ImageSource
from brickquote.services.job_store import JobStore, generate_job_id
from brickquote.services.pdf_generator import generate_quote_pdf
from brickquote.services.pricing_engine import calculate_final_pricing
from brickquote.validators.estimate_validator import parse_estimate_result
from brickquote.validators.job_validator import validate_job_inputs

# Initialize Firebase Admin SDK
try:
    initialize_app()
except ValueError:
    # Already initialized
    pass

structlog.configure(
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.log_level.upper())
    )
)
logger = structlog.get_logger()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "3600"
}

STATUS_BY_CODE = {
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.MISSING_FIELD: 400,
    ErrorCode.JOB_NOT_FOUND: 404,
    ErrorCode.PROVIDER_ERROR: 502,
    ErrorCode.UNPARSABLE_RESPONSE: 502,
    ErrorCode.MALFORMED_RESPONSE: 502,
    ErrorCode.PDF_GENERATION_FAILED: 500,
}


# ============================================================================
# Helper Functions
# ============================================================================


def success_response(data: Dict[str, Any]) -> Dict[str, Any]:
    """Build success response."""
    return {"success": True, "data": data}


def error_response(code: str, message: str, details: Dict[str, Any] = None) -> Dict[str, Any]:
    """Build error response."""
    return {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details or {}
        }
    }


def get_request_json(req: https_fn.Request) -> Dict[str, Any]:
    """Extract JSON from request body.

    Raises:
        InvalidInput: If JSON is invalid.
    """
    try:
        return req.get_json(force=True) or {}
    except Exception as e:
        raise InvalidInput(f"Invalid JSON in request body: {str(e)}")


def require_field(data: Dict[str, Any], name: str) -> Any:
    """Return a required request field.

    Raises:
        BrickQuoteError: MISSING_FIELD if absent.
    """
    value = data.get(name)
    if value in (None, ""):
        raise BrickQuoteError(
            code=ErrorCode.MISSING_FIELD,
            message=f"Missing {name} in request",
            details={"field": name}
        )
    return value


def _cors_response() -> https_fn.Response:
    """Return CORS preflight response."""
    return https_fn.Response("", status=204, headers=CORS_HEADERS)


def _json_response(data: dict, status: int = 200) -> https_fn.Response:
    """Return JSON response with CORS headers."""
    return https_fn.Response(
        json.dumps(data, default=str),
        status=status,
        headers={**CORS_HEADERS, "Content-Type": "application/json"}
    )


def _error_json_response(e: BrickQuoteError) -> https_fn.Response:
    return _json_response(
        error_response(e.code, e.message, e.details),
        status=STATUS_BY_CODE.get(e.code, 500)
    )


def _internal_error_response(event: str, e: Exception) -> https_fn.Response:
    logger.exception(event, error=str(e))
    return _json_response(
        error_response(ErrorCode.INTERNAL_ERROR, f"Unexpected error: {str(e)}"),
        status=500
    )


def _parse_pricing_inputs(data: Any) -> PricingInputs:
    try:
        return PricingInputs.model_validate(data or {})
    except ValueError as e:
        raise InvalidInput(f"Invalid pricing inputs: {str(e)}", field="pricing")


def _parse_stored_estimate(data: Any):
    """Structural check of a client-supplied estimate."""
    try:
        return parse_estimate_result(data)
    except MalformedResponse as e:
        raise InvalidInput(e.message, field="estimate", details={"errors": e.errors})


# ============================================================================
# Estimate & Pricing
# ============================================================================


@https_fn.on_request(
    timeout_sec=120,
    memory=options.MemoryOption.MB_512,
    region="europe-west2"
)
def estimate_job(req: https_fn.Request) -> https_fn.Response:
    """Estimate a job from its photo.

    Request body:
    {
        "inputs": {...JobInputs, optional "pricing"},
        "imageBase64": "...",   // or
        "imageUrl": "https://...",
        "mediaType": "image/jpeg"
    }

    Response:
    {
        "success": true,
        "data": {"estimate": {...}, "pricing": {...} | null}
    }
    """
    if req.method == "OPTIONS":
        return _cors_response()

    try:
        data = get_request_json(req)
        inputs = validate_job_inputs(require_field(data, "inputs"))
        image = ImageSource(
            base64=data.get("imageBase64"),
            url=data.get("imageUrl"),
            media_type=data.get("mediaType"),
        )

        estimate = asyncio.run(EstimationService().estimate(inputs, image))

        pricing = None
        if inputs.pricing is not None:
            pricing = calculate_final_pricing(estimate, inputs.pricing, inputs.job_type).to_dict()

        return _json_response(success_response({
            "estimate": estimate.to_dict(),
            "pricing": pricing,
        }))

    except BrickQuoteError as e:
        logger.warning("estimate_job_failed", code=e.code, error=e.message)
        return _error_json_response(e)
    except Exception as e:
        return _internal_error_response("estimate_job_exception", e)


@https_fn.on_request(
    timeout_sec=30,
    memory=options.MemoryOption.MB_256,
    region="europe-west2"
)
def price_quote(req: https_fn.Request) -> https_fn.Response:
    """Price an estimate with the user's billing configuration.

    Request body:
    {
        "estimate": {...EstimateResult},
        "pricing": {...PricingInputs},
        "jobType": "Brickwork"
    }
    """
    if req.method == "OPTIONS":
        return _cors_response()

    try:
        data = get_request_json(req)
        estimate = _parse_stored_estimate(require_field(data, "estimate"))
        pricing_inputs = _parse_pricing_inputs(data.get("pricing"))
        try:
            job_type = JobType(require_field(data, "jobType"))
        except ValueError:
            raise InvalidInput(f"Unknown jobType: {data.get('jobType')}", field="jobType")

        pricing = calculate_final_pricing(estimate, pricing_inputs, job_type)
        return _json_response(success_response(pricing.to_dict()))

    except BrickQuoteError as e:
        return _error_json_response(e)
    except Exception as e:
        return _internal_error_response("price_quote_exception", e)


# ============================================================================
# Jobs
# ============================================================================


@https_fn.on_request(
    timeout_sec=30,
    memory=options.MemoryOption.MB_256,
    region="europe-west2"
)
def save_job(req: https_fn.Request) -> https_fn.Response:
    """Save an estimate as a job.

    Request body:
    {
        "userId": "user-123",
        "jobId": "optional existing id",
        "inputs": {...}, "estimate": {...},
        "photoUrl": "https://...", "pricing": {...}
    }
    """
    if req.method == "OPTIONS":
        return _cors_response()

    try:
        data = get_request_json(req)
        job = SavedJob(
            id=data.get("jobId") or generate_job_id(),
            user_id=require_field(data, "userId"),
            inputs=validate_job_inputs(require_field(data, "inputs")),
            outputs=_parse_stored_estimate(require_field(data, "estimate")),
            photo_url=data.get("photoUrl"),
            pricing=_parse_pricing_inputs(data["pricing"]) if data.get("pricing") else None,
        )

        job_id = asyncio.run(JobStore().save_job(job))
        return _json_response(success_response({"jobId": job_id}))

    except BrickQuoteError as e:
        return _error_json_response(e)
    except Exception as e:
        return _internal_error_response("save_job_exception", e)


@https_fn.on_request(
    timeout_sec=30,
    memory=options.MemoryOption.MB_256,
    region="europe-west2"
)
def list_jobs(req: https_fn.Request) -> https_fn.Response:
    """List a user's saved jobs, newest first.

    Request body: {"userId": "user-123"}
    """
    if req.method == "OPTIONS":
        return _cors_response()

    try:
        data = get_request_json(req)
        user_id = require_field(data, "userId")
        jobs = asyncio.run(JobStore().list_jobs(user_id))
        return _json_response(success_response({"jobs": [job.to_dict() for job in jobs]}))

    except BrickQuoteError as e:
        return _error_json_response(e)
    except Exception as e:
        return _internal_error_response("list_jobs_exception", e)


async def _get_owned_job(store: JobStore, job_id: str, user_id: str) -> SavedJob:
    """Fetch a job, treating another user's job as not found."""
    job = await store.require_job(job_id)
    if job.user_id != user_id:
        raise StorageError(
            message=f"Job not found: {job_id}",
            code=ErrorCode.JOB_NOT_FOUND,
            job_id=job_id
        )
    return job


async def _delete_job_async(job_id: str, user_id: str) -> None:
    store = JobStore()
    await _get_owned_job(store, job_id, user_id)
    await store.delete_job(job_id)


@https_fn.on_request(
    timeout_sec=30,
    memory=options.MemoryOption.MB_256,
    region="europe-west2"
)
def delete_job(req: https_fn.Request) -> https_fn.Response:
    """Delete a saved job.

    Request body: {"jobId": "...", "userId": "user-123"}
    """
    if req.method == "OPTIONS":
        return _cors_response()

    try:
        data = get_request_json(req)
        job_id = require_field(data, "jobId")
        user_id = require_field(data, "userId")
        asyncio.run(_delete_job_async(job_id, user_id))
        return _json_response(success_response({"deleted": True}))

    except BrickQuoteError as e:
        return _error_json_response(e)
    except Exception as e:
        return _internal_error_response("delete_job_exception", e)


# ============================================================================
# PDF Export
# ============================================================================


async def _export_quote_async(job_id: str, user_id: str, pricing: Any) -> Dict[str, Any]:
    store = JobStore()
    job = await _get_owned_job(store, job_id, user_id)
    profile = await store.get_profile(user_id)
    pricing_inputs = _parse_pricing_inputs(pricing) if pricing else None

    result = generate_quote_pdf(job, profile, pricing_inputs)
    return {
        "fileName": f"quote-{job.id}.pdf",
        "pdfBase64": base64.b64encode(result.pdf_bytes).decode("utf-8"),
        "fileSizeBytes": result.file_size_bytes,
        "pricing": result.pricing.to_dict(),
        "generatedAt": result.generated_at,
    }


@https_fn.on_request(
    timeout_sec=60,
    memory=options.MemoryOption.GB_1,
    region="europe-west2"
)
def export_quote_pdf(req: https_fn.Request) -> https_fn.Response:
    """Render a saved job as a PDF quote.

    Request body:
    {
        "jobId": "...",
        "userId": "user-123",
        "pricing": {...}   // optional override
    }
    """
    if req.method == "OPTIONS":
        return _cors_response()

    try:
        data = get_request_json(req)
        job_id = require_field(data, "jobId")
        user_id = require_field(data, "userId")
        result = asyncio.run(_export_quote_async(job_id, user_id, data.get("pricing")))
        return _json_response(success_response(result))

    except BrickQuoteError as e:
        return _error_json_response(e)
    except Exception as e:
        return _internal_error_response("export_quote_pdf_exception", e)
