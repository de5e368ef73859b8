"""
Audit Models for Finance Tracker

Every change to the ledger, and every time the ledger could not be
read or written, is recorded as an audit event. This provides:
1. Traceability of all mutations
2. Debugging information when storage misbehaves
3. Ability to explain why an entry was rejected

DESIGN DECISION: Audit events are only ever logged, never edited.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Lifecycle
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_LOAD_FAILED = "ledger_load_failed"

    # Mutations
    ENTRY_CREATED = "entry_created"
    ENTRY_UPDATED = "entry_updated"
    ENTRY_DELETED = "entry_deleted"

    # Rejections
    ENTRY_REJECTED = "entry_rejected"
    ENTRY_NOT_FOUND = "entry_not_found"

    # Persistence
    LEDGER_PERSISTED = "ledger_persisted"
    LEDGER_PERSIST_FAILED = "ledger_persist_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Which entry is this about, if any
    entry_id: Optional[str] = Field(
        default=None,
        description="ID of the entry this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entry_id": self.entry_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.entry_created(entry_id, "expense", "45.50", 2)
        event = AuditEventBuilder.persist_failed("disk full", 3)
    """

    @staticmethod
    def ledger_loaded(entry_count: int, source: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            description=f"Ledger loaded with {entry_count} entries",
            details={
                "entry_count": entry_count,
                "source": source,
            },
        )

    @staticmethod
    def ledger_load_failed(error_message: str, source: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOAD_FAILED,
            severity=AuditSeverity.WARNING,
            description="Stored ledger could not be read; starting empty",
            error_message=error_message,
            details={
                "source": source,
            },
        )

    @staticmethod
    def entry_created(
        entry_id: str,
        kind: str,
        amount: str,
        entry_count: int
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_CREATED,
            entry_id=entry_id,
            description=f"Entry created: {kind} {amount}",
            details={
                "kind": kind,
                "amount": amount,
                "entry_count": entry_count,
            },
        )

    @staticmethod
    def entry_updated(
        entry_id: str,
        changed_fields: list[str]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_UPDATED,
            entry_id=entry_id,
            description=f"Entry updated ({len(changed_fields)} fields changed)",
            details={
                "changed_fields": changed_fields,
            },
        )

    @staticmethod
    def entry_deleted(entry_id: str, entry_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_DELETED,
            entry_id=entry_id,
            description="Entry deleted",
            details={
                "entry_count": entry_count,
            },
        )

    @staticmethod
    def entry_rejected(
        issues: list[dict],
        entry_id: Optional[str] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_REJECTED,
            severity=AuditSeverity.WARNING,
            entry_id=entry_id,
            description=f"Entry rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def entry_not_found(entry_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ENTRY_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entry_id=entry_id,
            description=f"No entry with id {entry_id}",
        )

    @staticmethod
    def ledger_persisted(entry_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_PERSISTED,
            severity=AuditSeverity.DEBUG,
            description=f"Ledger written ({entry_count} entries)",
            details={
                "entry_count": entry_count,
            },
        )

    @staticmethod
    def persist_failed(error_message: str, entry_count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_PERSIST_FAILED,
            severity=AuditSeverity.ERROR,
            description="Ledger could not be written; continuing in memory only",
            error_message=error_message,
            details={
                "entry_count": entry_count,
            },
        )
