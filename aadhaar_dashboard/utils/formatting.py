"""
Number formatting and rounding helpers shared by the chat answers and reports.
"""
import math
from typing import Union

Number = Union[int, float]


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def format_number(value: Number) -> str:
    """Thousands separated integer, e.g. 1234567 -> '1,234,567'."""
    return f"{int(value):,}"


def percentage(part: Number, whole: Number) -> float:
    """Share of ``part`` in ``whole`` as a percentage; 0.0 for an empty whole."""
    if not whole:
        return 0.0
    return part / whole * 100


def format_percentage(part: Number, whole: Number) -> str:
    """One-decimal percentage string, e.g. '42.5'."""
    return f"{percentage(part, whole):.1f}"
