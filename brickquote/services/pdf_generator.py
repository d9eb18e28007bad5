"""
PDF Quote Generation Service for BrickQuote.

Generates customer-facing PDF quotes using WeasyPrint and Jinja2 templates.
A quote includes the company header, job details, the price summary with its
labour/materials/VAT breakdown, material quantities, assumptions, exclusions,
notes and the disclaimer.

Architecture:
- Pricing is recomputed from the saved job (never read from storage)
- Uses Jinja2 for HTML template rendering
- Uses WeasyPrint for HTML to PDF conversion
- Company logo fetched with httpx and inlined as base64
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from datetime import datetime
from pathlib import Path
import base64
import time

import httpx
import structlog
from jinja2 import Environment, FileSystemLoader, select_autoescape

from brickquote.config.errors import BrickQuoteError, ErrorCode
from brickquote.models.job import SavedJob
from brickquote.models.pricing import FinalPricing, PricingInputs
from brickquote.models.profile import QuoteProfile
from brickquote.services.image_source import get_media_type
from brickquote.services.pricing_engine import calculate_final_pricing
from brickquote.utils.formatting import (
    format_area,
    format_currency,
    format_labour_range,
    format_price_range,
    format_range,
)

logger = structlog.get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"
QUOTE_TEMPLATE = "quote.html"

LOGO_FETCH_TIMEOUT_SECONDS = 10.0

METHOD_LABELS = {
    "day_rate": "Day rate",
    "per_1000_bricks": "Per 1000 bricks",
    "per_m2": "Per m²",
}


@dataclass
class QuotePDFResult:
    """
    Result of PDF generation.

    Attributes:
        pdf_bytes: The rendered PDF
        pricing: The pricing printed on the quote
        output_path: Local file path, when the PDF was written to disk
        file_size_bytes: Size of the PDF file in bytes
        generated_at: ISO timestamp when the PDF was generated
    """

    pdf_bytes: bytes
    pricing: FinalPricing
    output_path: Optional[str]
    file_size_bytes: int
    generated_at: str


# =============================================================================
# Template Engine Setup
# =============================================================================


def _get_jinja_env() -> Environment:
    """Create and configure Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    env.filters["currency"] = format_currency
    return env


def _load_logo_data_uri(logo_url: Optional[str]) -> str:
    """
    Fetch the company logo as a data URI for embedding in the PDF.

    Returns:
        data:image/...;base64 URI, or empty string if unavailable
    """
    if not logo_url:
        return ""

    try:
        response = httpx.get(logo_url, timeout=LOGO_FETCH_TIMEOUT_SECONDS, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("logo_fetch_failed", logo_url=logo_url, error=str(e))
        return ""

    media_type = response.headers.get("content-type", "").split(";")[0] or get_media_type(logo_url)
    encoded = base64.b64encode(response.content).decode("utf-8")
    return f"data:{media_type};base64,{encoded}"


# =============================================================================
# Context & Rendering
# =============================================================================


def resolve_pricing_inputs(
    job: SavedJob,
    profile: QuoteProfile,
    pricing_inputs: Optional[PricingInputs] = None,
) -> PricingInputs:
    """Explicit argument, then the inputs saved with the job, then profile defaults."""
    return pricing_inputs or job.pricing or profile.default_pricing_inputs()


def build_quote_context(
    job: SavedJob,
    profile: QuoteProfile,
    pricing_inputs: Optional[PricingInputs] = None,
    logo_data_uri: str = "",
    pricing: Optional[FinalPricing] = None,
) -> Dict[str, Any]:
    """
    Assemble everything the quote template prints.

    Args:
        pricing: Already computed pricing for these inputs, if any

    Returns:
        Template context dictionary
    """
    pricing_inputs = resolve_pricing_inputs(job, profile, pricing_inputs)
    estimate = job.outputs
    if pricing is None:
        pricing = calculate_final_pricing(estimate, pricing_inputs, job.inputs.job_type)
    created = job.created_at

    return {
        "company_name": profile.company_name,
        "phone": profile.phone,
        "email": profile.email,
        "address": (profile.address or "").replace("\n", ", "),
        "logo": logo_data_uri,
        "disclaimer": profile.disclaimer_text,
        "quote_date": f"{created.day} {created:%B %Y}",
        "job_id": job.id,
        "job": {
            "type": job.inputs.job_type.value,
            "anchor": f"{job.inputs.anchor_type.value.capitalize()}: {job.inputs.anchor_value:g}m",
            "difficulty": job.inputs.difficulty.value,
            "has_openings": job.inputs.has_openings,
            "description": job.inputs.job_description,
            "area": format_area(estimate.area_m2),
        },
        "pricing": pricing,
        "pricing_inputs": pricing_inputs,
        "method_label": METHOD_LABELS[pricing_inputs.method.value],
        "total_range": format_price_range((pricing.total_low, pricing.total_high)),
        "quantities": [
            ("Bricks / blocks", format_range(estimate.brick_count_range)),
            ("Sand (kg)", format_range(estimate.materials.sand_kg_range)),
            ("Cement (bags)", format_range(estimate.materials.cement_bags_range)),
            ("Labour", format_labour_range(estimate.labour_hours_range)),
        ],
        "other_materials": estimate.materials.other,
        "assumptions": estimate.assumptions,
        "exclusions": estimate.exclusions,
        "notes": estimate.notes,
    }


def render_quote_html(
    job: SavedJob,
    profile: QuoteProfile,
    pricing_inputs: Optional[PricingInputs] = None,
    logo_data_uri: str = "",
    pricing: Optional[FinalPricing] = None,
) -> str:
    """Render the quote template to HTML."""
    env = _get_jinja_env()
    template = env.get_template(QUOTE_TEMPLATE)
    context = build_quote_context(job, profile, pricing_inputs, logo_data_uri, pricing)
    return template.render(**context)


def _html_to_pdf(html_content: str) -> bytes:
    """
    Convert HTML to PDF using WeasyPrint.

    Args:
        html_content: Rendered HTML string

    Returns:
        PDF content as bytes
    """
    from weasyprint import HTML
    from weasyprint.text.fonts import FontConfiguration

    font_config = FontConfiguration()
    html_doc = HTML(string=html_content, base_url=str(TEMPLATE_DIR))
    return html_doc.write_pdf(font_config=font_config)


# =============================================================================
# PDF Generation
# =============================================================================


def generate_quote_pdf(
    job: SavedJob,
    profile: QuoteProfile,
    pricing_inputs: Optional[PricingInputs] = None,
    output_path: Optional[str] = None,
) -> QuotePDFResult:
    """
    Generate a PDF quote for a saved job.

    Args:
        job: Saved job (inputs + estimate)
        profile: Company profile printed on the quote
        pricing_inputs: Billing configuration (defaults: job's, then profile's)
        output_path: Optional local file path to write the PDF to

    Returns:
        QuotePDFResult with the PDF bytes and the pricing it shows

    Raises:
        BrickQuoteError: PDF_GENERATION_FAILED if rendering or conversion fails.
    """
    start_time = time.perf_counter()

    logger.info("quote_pdf_generation_started", job_id=job.id, output_path=output_path)

    try:
        resolved_inputs = resolve_pricing_inputs(job, profile, pricing_inputs)
        pricing = calculate_final_pricing(job.outputs, resolved_inputs, job.inputs.job_type)

        logo = _load_logo_data_uri(profile.logo_url)
        html_content = render_quote_html(job, profile, resolved_inputs, logo, pricing)
        pdf_bytes = _html_to_pdf(html_content)

        if output_path:
            output_file = Path(output_path)
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_bytes(pdf_bytes)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "quote_pdf_generated",
            job_id=job.id,
            file_size_kb=round(len(pdf_bytes) / 1024, 2),
            duration_ms=round(duration_ms, 2),
        )

        return QuotePDFResult(
            pdf_bytes=pdf_bytes,
            pricing=pricing,
            output_path=str(Path(output_path).absolute()) if output_path else None,
            file_size_bytes=len(pdf_bytes),
            generated_at=datetime.now().isoformat(),
        )

    except Exception as e:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.error(
            "quote_pdf_generation_error",
            job_id=job.id,
            error=str(e),
            error_type=type(e).__name__,
            duration_ms=round(duration_ms, 2),
        )
        raise BrickQuoteError(
            code=ErrorCode.PDF_GENERATION_FAILED,
            message=f"Failed to generate PDF: {e}",
            details={"job_id": job.id},
        ) from e
