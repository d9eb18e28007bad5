"""Display formatting for estimates and quotes."""

import math
from typing import Callable, Optional, Sequence

RANGE_SEPARATOR = " – "


def format_number(value: float) -> str:
    """Thousands separators, up to 3 decimal places, no trailing zeros."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_currency(amount: float) -> str:
    """Whole pounds, e.g. 1234.4 -> '£1,234'."""
    return f"£{int(math.floor(amount + 0.5)):,}"


def format_range(
    pair: Sequence[float],
    formatter: Optional[Callable[[float], str]] = None
) -> str:
    """Format a (low, high) pair as 'low – high'."""
    fmt = formatter or format_number
    return f"{fmt(pair[0])}{RANGE_SEPARATOR}{fmt(pair[1])}"


def format_price_range(pair: Sequence[float]) -> str:
    return format_range(pair, format_currency)


def hours_to_workdays(hours: float, hours_per_day: float = 8) -> float:
    """Convert hours to working days, rounded up to a tenth of a day."""
    return math.ceil(round(hours / hours_per_day * 10, 9)) / 10


def format_labour_range(pair: Sequence[float]) -> str:
    """e.g. (20, 30) -> '20–30 hours (2.5–3.8 days)'."""
    min_days = format_number(hours_to_workdays(pair[0]))
    max_days = format_number(hours_to_workdays(pair[1]))
    return (
        f"{format_number(pair[0])}–{format_number(pair[1])} hours "
        f"({min_days}–{max_days} days)"
    )


def format_area(area_m2: float) -> str:
    return f"{format_number(round(area_m2, 1))} m²"
