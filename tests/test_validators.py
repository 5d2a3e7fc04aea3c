"""
Tests for input validators.
"""

import pytest

from salesreports.errors import ValidationFailure
from salesreports.services.validators import (
    is_valid_month,
    validate_director,
    validate_director_setup,
    validate_entity_type,
    validate_named,
    validate_period,
    validate_photo_upload,
    validate_report_key,
)

MB = 1024 * 1024


class TestReportKey:
    """Director and month are both required."""

    def test_valid(self):
        assert validate_report_key("dir-1", "2025-03").is_valid

    def test_missing_director(self):
        result = validate_report_key("", "2025-03")
        assert result.errors == ["Director is required"]

    def test_missing_month(self):
        result = validate_report_key("dir-1", None)
        assert result.errors == ["Month is required"]

    @pytest.mark.parametrize("month", ["2025-13", "2025-3", "March 2025", "2025-00"])
    def test_bad_month_format(self, month):
        result = validate_report_key("dir-1", month)
        assert result.errors == ["Month must be in YYYY-MM format"]

    def test_raise_if_invalid(self):
        with pytest.raises(ValidationFailure, match="Director is required; Month is required"):
            validate_report_key(None, None).raise_if_invalid()

    def test_is_valid_month(self):
        assert is_valid_month("2024-12")
        assert not is_valid_month("")
        assert not is_valid_month(None)


class TestMasterData:
    def test_name_required(self):
        assert not validate_named("  ").is_valid
        assert validate_named("West").is_valid

    def test_director_requires_email(self):
        result = validate_director("Dana", "")
        assert result.errors == ["Email is required"]

    def test_director_odd_email_is_warning(self):
        """An email without '@' is accepted with a warning."""
        result = validate_director("Dana", "dana")
        assert result.is_valid
        assert result.warnings == ["Email does not look like an address"]

    def test_entity_type(self):
        assert validate_entity_type("distributor").is_valid
        assert validate_entity_type(None).is_valid
        assert not validate_entity_type("retailer").is_valid

    def test_director_setup_channels(self):
        assert validate_director_setup(["rep_firm", "specialty_account"]).is_valid
        assert validate_director_setup([]).is_valid
        result = validate_director_setup(["rep_firm", "retail", "web"])
        assert result.errors == ["Unknown channel types: retail, web"]


class TestPeriod:
    """Month and quarter periods."""

    def test_month(self):
        assert validate_period("month", "2025-03").is_valid

    def test_quarter(self):
        assert validate_period("quarter", "2025-Q4").is_valid

    def test_missing(self):
        result = validate_period("month", "")
        assert result.errors == ["Missing periodType or periodValue"]

    def test_bad_quarter(self):
        assert not validate_period("quarter", "2025-Q5").is_valid

    def test_unknown_type(self):
        result = validate_period("year", "2025")
        assert result.errors == ["periodType must be 'month' or 'quarter'"]


class TestPhotoUpload:
    def test_accepts_png(self):
        assert validate_photo_upload("image/png", MB, 10 * MB).is_valid

    def test_rejects_type(self):
        result = validate_photo_upload("application/pdf", MB, 10 * MB)
        assert result.errors == ["Invalid file type. Only JPEG, PNG, GIF, and WebP are allowed."]

    def test_rejects_size(self):
        result = validate_photo_upload("image/jpeg", 11 * MB, 10 * MB)
        assert result.errors == ["File too large. Maximum size is 10MB."]
