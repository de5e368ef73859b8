"""Tests for EntryValidator."""

import pytest
from decimal import Decimal

from finance_tracker.config import AppSettings
from finance_tracker.errors import ValidationError
from finance_tracker.models.entry import EntryKind
from finance_tracker.validation import EntryValidator, get_user_friendly_summary


class TestParseAmount:
    """Tests for amount parsing."""

    @pytest.mark.parametrize("raw, expected", [
        ("45.50", Decimal("45.50")),
        ("  1000 ", Decimal("1000")),
        ("$1,234.56", Decimal("1234.56")),
        ("0.01", Decimal("0.01")),
        ("45.500", Decimal("45.50")),
        ("1E+2", Decimal("100")),
        (Decimal("12.30"), Decimal("12.30")),
        (7, Decimal("7")),
        (45.5, Decimal("45.5")),
    ])
    def test_valid_amounts(self, validator, raw, expected):
        """Test that well-formed positive amounts parse exactly."""
        assert validator.parse_amount(raw) == expected

    @pytest.mark.parametrize("raw, issue_type", [
        ("", "missing"),
        ("   ", "missing"),
        (None, "missing"),
        ("abc", "invalid_format"),
        ("12.3.4", "invalid_format"),
        ("NaN", "invalid_format"),
        ("Infinity", "invalid_format"),
        (True, "invalid_format"),
        ("0", "out_of_range"),
        ("-5", "out_of_range"),
        ("0.00", "out_of_range"),
        ("10.005", "too_precise"),
        ("2000000", "out_of_range"),
    ])
    def test_invalid_amounts(self, validator, raw, issue_type):
        """Test that unusable amounts are rejected with the right issue."""
        with pytest.raises(ValidationError) as exc_info:
            validator.parse_amount(raw)
        issues = exc_info.value.issues
        assert len(issues) == 1
        assert issues[0].field == "amount"
        assert issues[0].issue_type == issue_type

    def test_huge_amount_rejected_before_rounding(self, validator):
        """Test that a value too large to quantize is still a clean rejection."""
        with pytest.raises(ValidationError) as exc_info:
            validator.parse_amount("1" * 40 + ".123")
        assert exc_info.value.issues[0].issue_type == "out_of_range"

    @pytest.mark.parametrize("raw", [
        "1" * 30 + ".123",
        "1E+30",
    ])
    def test_too_many_digits_under_a_huge_ceiling(self, raw):
        """Test that an amount past the decimal context is rejected, not raised."""
        settings = AppSettings.model_construct(
            max_description_length=50,
            max_entry_amount=1e40,
            currency_symbol="$",
        )
        validator = EntryValidator(settings)
        with pytest.raises(ValidationError) as exc_info:
            validator.parse_amount(raw)
        assert exc_info.value.issues[0].field == "amount"
        assert exc_info.value.issues[0].issue_type == "out_of_range"

    def test_largest_allowed_ceiling_still_quantizes(self):
        validator = EntryValidator(AppSettings(max_entry_amount=1e15))
        assert validator.parse_amount("999999999999999.990") == Decimal("999999999999999.99")
        assert validator.parse_amount("1E+14") == Decimal("100000000000000")

    def test_custom_currency_symbol(self):
        validator = EntryValidator(AppSettings(currency_symbol="€"))
        assert validator.parse_amount("€ 12.00") == Decimal("12.00")


class TestParseKind:
    """Tests for kind parsing."""

    @pytest.mark.parametrize("raw, expected", [
        (EntryKind.INCOME, EntryKind.INCOME),
        ("income", EntryKind.INCOME),
        ("Expense", EntryKind.EXPENSE),
        (" EXPENSE ", EntryKind.EXPENSE),
    ])
    def test_valid_kinds(self, validator, raw, expected):
        assert validator.parse_kind(raw) is expected

    @pytest.mark.parametrize("raw", ["transfer", "", None, 1])
    def test_invalid_kinds(self, validator, raw):
        with pytest.raises(ValidationError) as exc_info:
            validator.parse_kind(raw)
        assert exc_info.value.fields == ["kind"]


class TestValidate:
    """Tests for full-form validation."""

    def test_valid_input(self, validator):
        data = validator.validate("  Groceries ", "45.50", "expense")
        assert data.description == "Groceries"
        assert data.amount == Decimal("45.50")
        assert data.kind == EntryKind.EXPENSE

    def test_collects_all_issues(self, validator):
        """Test that every bad field is reported, not just the first."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate("", "-1", "gift")
        assert exc_info.value.fields == ["description", "amount", "kind"]

    def test_description_too_long(self, validator):
        """Test that descriptions over the configured limit are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate("x" * 51, "1.00", "income")
        assert exc_info.value.issues[0].issue_type == "too_long"

    def test_description_must_be_text(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate(42, "1.00", "income")
        assert exc_info.value.issues[0].issue_type == "invalid_format"

    def test_error_message_lists_issues(self, validator):
        with pytest.raises(ValidationError, match="Description is required"):
            validator.validate(" ", "1.00", "income")

    def test_user_friendly_summary(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate("", "abc", "income")
        summary = get_user_friendly_summary(exc_info.value)
        assert summary.startswith("Please fix the following before saving:")
        assert "Description is required" in summary
        assert "is not a number" in summary


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
