"""
Formatting Helpers

Currency display/parsing for form inputs and labels for reporting periods.
"""

import re
from typing import Optional, Union

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

_LEADING_NUMBER = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)")
_NOT_NUMERIC = re.compile(r"[^0-9.\-]")

Number = Union[int, float]


def format_currency_display(value: Number) -> str:
    """
    Format a number with US thousands separators (1234567 -> "1,234,567").

    Returns an empty string for 0 so inputs can display as blank.
    Fractions keep up to three digits.
    """
    if value == 0:
        return ""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def parse_currency_input(value: Optional[str]) -> float:
    """
    Parse a formatted number string back to a number.

    Strips everything except digits, '.' and '-', then reads the longest
    leading number. Empty or invalid input gives 0.
    """
    if not value:
        return 0
    cleaned = _NOT_NUMERIC.sub("", value)
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0
    parsed = float(match.group(0))
    return int(parsed) if parsed.is_integer() else parsed


def format_currency(value: Optional[Number]) -> str:
    """Format a value as currency ("$1,234.00")."""
    if value is None:
        return "$0.00"
    return f"${value:,.2f}"


def format_whole_dollars(value: Optional[Number]) -> str:
    """Currency without cents, as used in prompts and consolidated views."""
    return f"${value or 0:,.0f}"


def format_month_label(month: str) -> str:
    """'2024-12' -> 'December 2024'."""
    year, month_num = month.split("-")
    return f"{MONTH_NAMES[int(month_num) - 1]} {year}"


def format_period_label(period_type: str, period_value: str) -> str:
    """Human label for a month ('March 2025') or quarter ('2025 Q1')."""
    if period_type == "quarter":
        return period_value.replace("-", " ")
    return format_month_label(period_value)
