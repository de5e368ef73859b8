"""
Ledger Store

The one object that owns the ledger. Callers create, update and delete
entries through it and get back frozen entries and snapshots; nothing
outside the store ever holds the live list.

FLOW (every mutation):
1. Validate input → reject with ValidationError, nothing changes
2. Apply the change to the in-memory list
3. Write the whole list to storage
4. Audit the change

A failed write (step 3) does not undo step 2. The store logs it, emits
a PersistenceWarning, and carries on in memory only for the rest of the
session.
"""

import warnings
from datetime import date
from typing import Any, Callable, Optional, Union
from uuid import uuid4

from finance_tracker.audit import AuditLogger
from finance_tracker.errors import NotFoundError, PersistenceWarning, ValidationError
from finance_tracker.ledger.totals import compute_totals, filter_entries
from finance_tracker.models.audit import AuditEventBuilder
from finance_tracker.models.entry import (
    Entry,
    EntryFilter,
    EntryKind,
    LedgerSnapshot,
    Totals,
)
from finance_tracker.services.storage import (
    CorruptLedgerError,
    LedgerStorageInterface,
    PersistenceError,
)
from finance_tracker.validation import EntryValidator
from finance_tracker.validation.validator import AmountInput


def _new_entry_id() -> str:
    return str(uuid4())


class LedgerStore:
    """
    Sole owner of the ordered entry collection.

    Operations before load() act on an empty ledger.
    """

    def __init__(
        self,
        storage: LedgerStorageInterface,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        today: Callable[[], date] = date.today,
        id_factory: Callable[[], str] = _new_entry_id,
    ):
        """
        Args:
            storage: Where the ledger is read from and written to
            validator: Input validator (default: one built from settings)
            audit_logger: Audit sink (default: local structlog logger)
            today: Clock used to date new entries
            id_factory: Source of fresh entry ids
        """
        self._storage = storage
        self._validator = validator or EntryValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._today = today
        self._id_factory = id_factory

        self._entries: list[Entry] = []
        self._loaded = False
        self._memory_only = False
        self._last_persistence_error: Optional[PersistenceError] = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def is_memory_only(self) -> bool:
        """True once storage failed to read or write; no further writes are attempted."""
        return self._memory_only

    @property
    def last_persistence_error(self) -> Optional[PersistenceError]:
        return self._last_persistence_error

    def __len__(self) -> int:
        return len(self._entries)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> list[Entry]:
        """
        Read the ledger from storage.

        An absent slot gives an empty ledger. A corrupt slot also gives an
        empty ledger, with a warning, and is overwritten by the next
        mutation. A slot that cannot be read at all gives an empty
        ledger and switches the store to memory-only, so the stored
        ledger is never clobbered. This never raises.
        """
        try:
            stored = self._storage.load()
        except PersistenceError as e:
            self._entries = []
            self._last_persistence_error = e
            if not isinstance(e, CorruptLedgerError):
                # The stored ledger may still be intact; never overwrite it
                self._memory_only = True
            self._audit_logger.log(
                AuditEventBuilder.ledger_load_failed(str(e), self._storage.source)
            )
            warnings.warn(
                f"Could not load ledger, starting empty: {e}",
                PersistenceWarning,
                stacklevel=2,
            )
        else:
            self._entries = list(stored or [])
            self._audit_logger.log(
                AuditEventBuilder.ledger_loaded(len(self._entries), self._storage.source)
            )

        self._loaded = True
        return list(self._entries)

    def _persist(self) -> None:
        if self._memory_only:
            return

        try:
            self._storage.save(self._entries)
        except PersistenceError as e:
            self._memory_only = True
            self._last_persistence_error = e
            self._audit_logger.log(
                AuditEventBuilder.persist_failed(str(e), len(self._entries))
            )
            warnings.warn(
                f"Could not save ledger, changes are kept in memory only: {e}",
                PersistenceWarning,
                stacklevel=3,
            )
            return

        self._audit_logger.log(AuditEventBuilder.ledger_persisted(len(self._entries)))

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _validate(self, description, amount, kind, entry_id: Optional[str] = None):
        try:
            return self._validator.validate(description, amount, kind)
        except ValidationError as e:
            self._audit_logger.log(AuditEventBuilder.entry_rejected(
                issues=[issue.model_dump() for issue in e.issues],
                entry_id=entry_id,
            ))
            raise

    def _index_of(self, entry_id: str) -> Optional[int]:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        return None

    def _fresh_id(self) -> str:
        entry_id = self._id_factory()
        while self._index_of(entry_id) is not None:
            entry_id = self._id_factory()
        return entry_id

    def create(
        self,
        description: Any,
        amount: AmountInput,
        kind: Union[EntryKind, str],
    ) -> Entry:
        """
        Append a new entry dated today.

        Raises:
            ValidationError: if any field is invalid (nothing is added)
        """
        data = self._validate(description, amount, kind)

        entry = Entry(
            id=self._fresh_id(),
            description=data.description,
            amount=data.amount,
            kind=data.kind,
            date=self._today(),
        )
        self._entries.append(entry)

        self._audit_logger.log(AuditEventBuilder.entry_created(
            entry_id=entry.id,
            kind=entry.kind.value,
            amount=str(entry.amount),
            entry_count=len(self._entries),
        ))
        self._persist()
        return entry

    def update(
        self,
        entry_id: str,
        description: Any,
        amount: AmountInput,
        kind: Union[EntryKind, str],
    ) -> Entry:
        """
        Replace the editable fields of an existing entry.

        The entry keeps its id, its date and its position.

        Raises:
            NotFoundError: if no entry has `entry_id`
            ValidationError: if any field is invalid
        """
        index = self._index_of(entry_id)
        if index is None:
            self._audit_logger.log(AuditEventBuilder.entry_not_found(entry_id))
            raise NotFoundError(entry_id)

        data = self._validate(description, amount, kind, entry_id=entry_id)

        current = self._entries[index]
        changes = data.model_dump()
        changed_fields = [
            name for name, value in changes.items()
            if getattr(current, name) != value
        ]
        updated = current.model_copy(update=changes)
        self._entries[index] = updated

        self._audit_logger.log(AuditEventBuilder.entry_updated(entry_id, changed_fields))
        self._persist()
        return updated

    def delete(self, entry_id: str) -> bool:
        """
        Remove the entry with `entry_id`.

        Returns False (and writes nothing) if there was no such entry.
        """
        index = self._index_of(entry_id)
        if index is None:
            return False

        del self._entries[index]

        self._audit_logger.log(AuditEventBuilder.entry_deleted(entry_id, len(self._entries)))
        self._persist()
        return True

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, entry_id: str) -> Entry:
        """
        Raises:
            NotFoundError: if no entry has `entry_id`
        """
        index = self._index_of(entry_id)
        if index is None:
            raise NotFoundError(entry_id)
        return self._entries[index]

    def list_entries(
        self,
        entry_filter: Union[EntryFilter, str] = EntryFilter.ALL,
    ) -> list[Entry]:
        """Entries matching `entry_filter` in insertion order."""
        return filter_entries(self._entries, entry_filter)

    def totals(self) -> Totals:
        """Recomputed from the current ledger on every call."""
        return compute_totals(self._entries)

    def snapshot(self) -> LedgerSnapshot:
        """Everything a view needs to render after an operation."""
        return LedgerSnapshot(
            entries=tuple(self._entries),
            totals=self.totals(),
            memory_only=self._memory_only,
        )
