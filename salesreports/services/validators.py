"""
Input Validators

Centralized validation for reports, master data, summaries and photo uploads.
Checks run before any write; `raise_if_invalid()` raises ValidationFailure
(a ValueError) with human-readable messages.
"""

import re
from typing import Any, List, Optional

from salesreports.errors import ValidationFailure
from salesreports.models.master_data import RepFirmMaster

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")
QUARTER_PATTERN = re.compile(r"^\d{4}-Q[1-4]$")

ALLOWED_PHOTO_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp"]

# Sales channels a rep firm belongs to and a director's form can show
CHANNEL_TYPES = RepFirmMaster.ENTITY_TYPES


class ValidationResult:
    """Container for validation results including warnings."""
    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_error(self, msg: str):
        self.errors.append(msg)

    def add_warning(self, msg: str):
        self.warnings.append(msg)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def raise_if_invalid(self):
        """Raise ValidationFailure if there are blocking errors."""
        if self.errors:
            raise ValidationFailure("; ".join(self.errors))


def _is_empty(value: Any) -> bool:
    """Check if value is None or empty string."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


def is_valid_month(value: Optional[str]) -> bool:
    return bool(value) and bool(MONTH_PATTERN.match(value))


# ============================================================
# REPORT VALIDATION
# ============================================================

def validate_report_key(director_id: Optional[str], month: Optional[str]) -> ValidationResult:
    """Director and month identify a report; both are required."""
    result = ValidationResult()

    if _is_empty(director_id):
        result.add_error("Director is required")

    if _is_empty(month):
        result.add_error("Month is required")
    elif not is_valid_month(month):
        result.add_error("Month must be in YYYY-MM format")

    return result


# ============================================================
# MASTER DATA VALIDATION
# ============================================================

def validate_named(name: Optional[str]) -> ValidationResult:
    """Regions, rep firms and customers only require a name."""
    result = ValidationResult()
    if _is_empty(name):
        result.add_error("Name is required")
    return result


def validate_director(name: Optional[str], email: Optional[str]) -> ValidationResult:
    """
    Validate director data.

    Required fields: name, email. Email uniqueness is enforced by the
    database and surfaces as a conflict.
    """
    result = validate_named(name)

    if _is_empty(email):
        result.add_error("Email is required")
    elif "@" not in email:
        result.add_warning("Email does not look like an address")

    return result


def validate_entity_type(entity_type: Optional[str]) -> ValidationResult:
    result = ValidationResult()
    if not _is_empty(entity_type) and entity_type not in CHANNEL_TYPES:
        result.add_error(f"Entity type must be one of: {', '.join(CHANNEL_TYPES)}")
    return result


def validate_director_setup(channel_types: List[str]) -> ValidationResult:
    """
    Validate a director setup before anything is replaced.

    Referenced ids are checked against the database by the caller; here only
    the channel types are checked against the known sales channels.
    """
    result = ValidationResult()

    unknown = [c for c in channel_types if c not in CHANNEL_TYPES]
    if unknown:
        result.add_error(f"Unknown channel types: {', '.join(unknown)}")

    return result


# ============================================================
# SUMMARY VALIDATION
# ============================================================

def validate_period(period_type: Optional[str], period_value: Optional[str]) -> ValidationResult:
    """A period is a month (YYYY-MM) or a quarter (YYYY-Qn)."""
    result = ValidationResult()

    if _is_empty(period_type) or _is_empty(period_value):
        result.add_error("Missing periodType or periodValue")
        return result

    if period_type == "month":
        if not is_valid_month(period_value):
            result.add_error("Month periods must be in YYYY-MM format")
    elif period_type == "quarter":
        if not QUARTER_PATTERN.match(period_value):
            result.add_error("Quarter periods must be in YYYY-Qn format")
    else:
        result.add_error("periodType must be 'month' or 'quarter'")

    return result


# ============================================================
# PHOTO VALIDATION
# ============================================================

def validate_photo_upload(
    content_type: Optional[str], size: int, max_size: int
) -> ValidationResult:
    """Only web image types up to `max_size` bytes are accepted."""
    result = ValidationResult()

    if content_type not in ALLOWED_PHOTO_TYPES:
        result.add_error("Invalid file type. Only JPEG, PNG, GIF, and WebP are allowed.")

    if size > max_size:
        result.add_error(f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.")

    return result
