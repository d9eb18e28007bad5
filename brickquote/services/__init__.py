"""BrickQuote services: estimation, pricing, persistence and PDF export."""
