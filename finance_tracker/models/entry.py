"""
Core Data Models for Finance Tracker

These models define the strict schemas for everything the ledger holds
or hands out. They are designed to:
1. Enforce the entry invariants at construction time
2. Provide clear validation error messages
3. Be serializable for the storage slot and for logging

DESIGN DECISION: Entries are frozen. The store is the only thing that
changes the ledger, and it does so by swapping whole entries, so any
list a caller holds is a stable snapshot.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class EntryKind(str, Enum):
    """Whether an entry adds to or takes from the balance."""
    INCOME = "income"
    EXPENSE = "expense"


class EntryFilter(str, Enum):
    """
    Which entries a listing should include.

    The values line up with EntryKind so a filter coming from a form
    ("income"/"expense") can be used directly.
    """
    ALL = "all"
    INCOME_ONLY = "income"
    EXPENSE_ONLY = "expense"

    def matches(self, entry: "Entry") -> bool:
        if self is EntryFilter.ALL:
            return True
        return entry.kind.value == self.value


# =============================================================================
# LEDGER ENTRY
# =============================================================================

class Entry(BaseModel):
    """
    One recorded transaction.

    `id` and `date` are assigned when the entry is created and never
    change afterwards; edits only touch description, amount and kind.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was for"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Positive amount with cent precision"
    )
    # Older slots stored the kind under "type"
    kind: EntryKind = Field(
        ...,
        validation_alias=AliasChoices("kind", "type"),
        description="Income or expense"
    )
    date: dt.date = Field(
        ...,
        description="Calendar date the entry was recorded"
    )

    def to_record(self) -> dict:
        """
        Convert to a plain record for the storage slot.

        Keys: id, description, amount, kind, date. The amount is kept
        as a decimal string so it round-trips without float error.
        """
        return {
            "id": self.id,
            "description": self.description,
            "amount": str(self.amount),
            "kind": self.kind.value,
            "date": self.date.isoformat(),
        }


class EntryInput(BaseModel):
    """
    The user-editable fields of an entry, after validation.

    Produced by EntryValidator and consumed by the store's
    create and update operations.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    description: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    kind: EntryKind


# =============================================================================
# DERIVED VIEWS
# =============================================================================

class Totals(BaseModel):
    """
    Aggregate sums over the ledger.

    Never persisted. Net balance is derived from the two sums so
    the three figures cannot disagree.
    """
    model_config = ConfigDict(frozen=True)

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")

    @computed_field
    @property
    def net_balance(self) -> Decimal:
        return self.total_income - self.total_expense


class LedgerSnapshot(BaseModel):
    """Read-only view of the ledger handed to the presentation layer."""
    model_config = ConfigDict(frozen=True)

    entries: tuple[Entry, ...] = ()
    totals: Totals = Field(default_factory=Totals)
    memory_only: bool = Field(
        default=False,
        description="True once a storage write has failed this session"
    )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in user input."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'out_of_range')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )
