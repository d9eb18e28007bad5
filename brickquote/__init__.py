"""BrickQuote - photo-based quoting backend for UK bricklayers.

This package turns a job photo plus a few measurements into a priced quote:
- services.llm_service: vision model call returning a raw JSON estimate
- services.normalizer: validates the response, falls back when it is unusable
- services.pricing_engine: applies the user's billing method, markup and VAT
- services.pdf_generator: renders the finished quote to PDF
"""

__version__ = "1.0.0"
