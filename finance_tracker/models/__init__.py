"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
All data flowing through the ledger must conform to these schemas.
"""

from finance_tracker.models.entry import (
    Entry,
    EntryFilter,
    EntryInput,
    EntryKind,
    LedgerSnapshot,
    Totals,
    ValidationIssue,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Entry",
    "EntryFilter",
    "EntryInput",
    "EntryKind",
    "LedgerSnapshot",
    "Totals",
    "ValidationIssue",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
