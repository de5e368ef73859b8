"""
Entry Input Validation

Turns raw form input (text from a description box, text from an amount
box, a kind selection) into a validated EntryInput, or rejects it.

CHECKS:
- Description present, not just whitespace, not absurdly long
- Amount parses as a finite decimal
- Amount is greater than zero
- Amount has no more than cent precision
- Amount is below the configured sanity ceiling
- Kind is income or expense

All checks run on every call so the caller gets the complete list of
problems at once. Validation NEVER silently fixes input: "12.345" is
rejected, not rounded.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from finance_tracker.config import AppSettings, get_settings
from finance_tracker.errors import ValidationError
from finance_tracker.models.entry import EntryInput, EntryKind, ValidationIssue


CENT = Decimal("0.01")

AmountInput = Union[str, int, float, Decimal, None]


class EntryValidator:
    """Validates the user-editable fields of a ledger entry."""

    def __init__(self, settings: Optional[AppSettings] = None):
        """
        Initialize validator.

        Args:
            settings: Application settings. Defaults to the cached
                      global settings.
        """
        self._settings = settings or get_settings().app

    def _check_description(
        self,
        raw: Any,
    ) -> tuple[Optional[str], list[ValidationIssue]]:
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return None, [ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
                suggested_fix="Say what the money was for, e.g. 'Groceries'",
            )]

        if not isinstance(raw, str):
            return None, [ValidationIssue(
                field="description",
                issue_type="invalid_format",
                message="Description must be text",
            )]

        description = raw.strip()
        max_length = self._settings.max_description_length
        if len(description) > max_length:
            return None, [ValidationIssue(
                field="description",
                issue_type="too_long",
                message=f"Description is longer than {max_length} characters",
                suggested_fix="Shorten the description",
            )]

        return description, []

    def _coerce_amount(self, raw: AmountInput) -> Optional[Decimal]:
        """Best-effort conversion to Decimal; None if it can't be parsed."""
        if isinstance(raw, bool):
            return None
        if isinstance(raw, Decimal):
            return raw
        if isinstance(raw, int):
            return Decimal(raw)
        if isinstance(raw, float):
            # str() gives the shortest repr, so 45.5 becomes 45.5 and not
            # 45.49999999999999...
            return Decimal(str(raw))
        if isinstance(raw, str):
            text = raw.strip()
            symbol = self._settings.currency_symbol
            if symbol and text.startswith(symbol):
                text = text[len(symbol):].strip()
            text = text.replace(",", "")
            try:
                return Decimal(text)
            except InvalidOperation:
                return None
        return None

    def _check_amount(
        self,
        raw: AmountInput,
    ) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            return None, [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Amount is required",
                suggested_fix="Enter an amount such as 45.50",
            )]

        amount = self._coerce_amount(raw)
        if amount is None or not amount.is_finite():
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount ({raw!r}) is not a number",
                suggested_fix="Enter digits only, e.g. 45.50",
            )]

        if amount <= 0:
            return None, [ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message="Amount must be greater than zero",
                suggested_fix="Use the income/expense selector for direction",
            )]

        max_amount = Decimal(str(self._settings.max_entry_amount))
        if amount > max_amount:
            return None, [ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=f"Amount ({amount:,.2f}) exceeds the maximum of {max_amount:,.2f}",
                suggested_fix="Please verify this amount is correct",
            )]

        exponent = amount.as_tuple().exponent
        try:
            normalized = self._normalize(amount, exponent)
        except InvalidOperation:
            # More digits than the decimal context can hold
            return None, [ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=f"Amount ({raw!r}) has too many digits",
                suggested_fix="Please verify this amount is correct",
            )]
        if normalized is None:
            return None, [ValidationIssue(
                field="amount",
                issue_type="too_precise",
                message=f"Amount ({amount}) has more than two decimal places",
                suggested_fix="Round to the nearest cent",
            )]

        return normalized, []

    @staticmethod
    def _normalize(amount: Decimal, exponent: int) -> Optional[Decimal]:
        """Amount at cent or whole precision; None if it has sub-cent digits."""
        if exponent < -2:
            # 45.500 is fine, 45.505 is not
            quantized = amount.quantize(CENT)
            if quantized != amount:
                return None
            return quantized
        if exponent > 0:
            # 1E+2 -> 100
            return amount.quantize(Decimal(1))
        return amount

    def _check_kind(
        self,
        raw: Any,
    ) -> tuple[Optional[EntryKind], list[ValidationIssue]]:
        if isinstance(raw, EntryKind):
            return raw, []

        if isinstance(raw, str):
            try:
                return EntryKind(raw.strip().lower()), []
            except ValueError:
                pass

        return None, [ValidationIssue(
            field="kind",
            issue_type="invalid_value",
            message=f"Kind must be 'income' or 'expense', got {raw!r}",
        )]

    def parse_amount(self, raw: AmountInput) -> Decimal:
        """
        Parse a single amount.

        Raises:
            ValidationError: if the amount is unusable
        """
        amount, issues = self._check_amount(raw)
        if issues:
            raise ValidationError(issues)
        return amount

    def parse_kind(self, raw: Any) -> EntryKind:
        """
        Parse an entry kind.

        Raises:
            ValidationError: if the kind is neither income nor expense
        """
        kind, issues = self._check_kind(raw)
        if issues:
            raise ValidationError(issues)
        return kind

    def validate(
        self,
        description: Any,
        amount: AmountInput,
        kind: Any,
    ) -> EntryInput:
        """
        Validate all user-editable fields together.

        Returns:
            EntryInput with normalized values

        Raises:
            ValidationError: listing every issue found
        """
        clean_description, issues = self._check_description(description)

        clean_amount, amount_issues = self._check_amount(amount)
        issues.extend(amount_issues)

        clean_kind, kind_issues = self._check_kind(kind)
        issues.extend(kind_issues)

        if any(issue.severity == "error" for issue in issues):
            raise ValidationError(issues)

        return EntryInput(
            description=clean_description,
            amount=clean_amount,
            kind=clean_kind,
        )


def get_user_friendly_summary(error: ValidationError) -> str:
    """
    Generate a short summary of a rejected entry for display.
    """
    lines = ["Please fix the following before saving:"]
    for issue in error.issues:
        lines.append(f"   • {issue.message}")
        if issue.suggested_fix:
            lines.append(f"     Hint: {issue.suggested_fix}")
    return "\n".join(lines)
