"""
Date utility functions for record dates and month keys.
"""
from datetime import date, datetime
from typing import Optional, Tuple

from aadhaar_dashboard.utils.constants import MONTHS, PLACEHOLDER_DATES

# Formats seen in UIDAI extracts and spreadsheet exports
DATE_FORMATS = [
    "%d-%m-%Y",  # DD-MM-YYYY (CSV format)
    "%Y-%m-%d",  # YYYY-MM-DD (ISO format)
    "%d/%m/%Y",  # DD/MM/YYYY
    "%Y/%m/%d",  # YYYY/MM/DD
    "%d.%m.%Y",  # DD.MM.YYYY
]


def is_placeholder_date(date_str: Optional[str]) -> bool:
    """True for empty values and the literal 'undefined'/'null' strings."""
    if date_str is None:
        return True
    return str(date_str).strip() in PLACEHOLDER_DATES


def parse_date_string(date_str: Optional[str]) -> Optional[date]:
    """
    Parse date string to date object.
    Handles multiple formats.

    Args:
        date_str: Date string to parse

    Returns:
        Parsed date or None if invalid
    """
    if is_placeholder_date(date_str):
        return None

    text = str(date_str).strip()

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    # ISO timestamps such as 2025-03-01T10:15:00
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def month_key(value: date) -> str:
    """Zero-padded year-month key, e.g. '2025-03'."""
    return f"{value.year:04d}-{value.month:02d}"


def split_month_key(key: str) -> Tuple[int, int]:
    """Split a 'YYYY-MM' key into (year, month)."""
    year, month = key.split("-")
    return int(year), int(month)


def format_month_label(key: str) -> str:
    """Short chart label for a month key: '2025-03' -> 'Mar 25'."""
    year, month = split_month_key(key)
    return f"{MONTHS[month - 1]} {str(year)[2:]}"


def add_months(year: int, month: int, offset: int) -> Tuple[int, int]:
    """
    Shift a calendar month by ``offset`` months, wrapping across years.

    Returns:
        Tuple of (year, month)
    """
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1
