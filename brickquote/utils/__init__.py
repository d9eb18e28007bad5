"""BrickQuote utilities."""

from brickquote.utils.formatting import (
    format_area,
    format_currency,
    format_labour_range,
    format_price_range,
    format_range,
    hours_to_workdays,
)

__all__ = [
    "format_area",
    "format_currency",
    "format_labour_range",
    "format_price_range",
    "format_range",
    "hours_to_workdays",
]
