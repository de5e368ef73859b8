"""
Ledger exceptions and warnings.

Storage-level failures live with the storage interface
(finance_tracker.services.storage); these are the errors the
ledger itself raises to its callers.
"""

from finance_tracker.models.entry import ValidationIssue


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class ValidationError(LedgerError):
    """
    User input was rejected before anything changed.

    Carries every issue found, not just the first, so a form can
    highlight all offending fields at once.
    """

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        messages = "; ".join(issue.message for issue in issues)
        super().__init__(f"Invalid entry: {messages}")

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class NotFoundError(LedgerError):
    """No entry with the given id."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Entry not found: {entry_id}")


class PersistenceWarning(UserWarning):
    """
    The ledger could not be read from or written to storage.

    Non-fatal: the in-memory ledger stays authoritative.
    """
    pass
