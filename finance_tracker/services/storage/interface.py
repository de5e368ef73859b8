"""
Abstract Storage Interface

DESIGN DECISION: The ledger talks to storage through a tiny interface.
This allows us to:
1. Keep the ledger on disk in a JSON slot
2. Use in-memory storage for testing
3. Swap in another backend without touching the store

The contract mirrors a browser-style key/value slot: the whole ledger
is read once at startup and the whole ledger is written after every
change. There are no partial updates.
"""

import json
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from finance_tracker.models.entry import Entry


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage.

    Any storage implementation must implement these methods.
    """

    @property
    @abstractmethod
    def source(self) -> str:
        """Human-readable description of where the ledger lives."""
        pass

    @abstractmethod
    def load(self) -> Optional[list[Entry]]:
        """
        Read the whole ledger.

        Returns:
            The stored entries in order, or None if nothing has been
            stored yet

        Raises:
            CorruptLedgerError: If the slot exists but can't be decoded
            PersistenceError: If the slot can't be read at all
        """
        pass

    @abstractmethod
    def save(self, entries: Sequence[Entry]) -> None:
        """
        Overwrite the stored ledger with `entries`.

        Raises:
            PersistenceError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class PersistenceError(StorageError):
    """The storage slot could not be read or written."""
    pass


class CorruptLedgerError(PersistenceError):
    """The storage slot holds something that isn't a valid ledger."""
    pass


def dumps_ledger(entries: Sequence[Entry]) -> str:
    """Serialize entries to the slot format: a JSON array of records."""
    return json.dumps([entry.to_record() for entry in entries], indent=2)


def loads_ledger(text: str) -> list[Entry]:
    """
    Parse the slot format back into entries.

    Raises:
        CorruptLedgerError: on malformed JSON, a non-array payload,
            an invalid record or a repeated id
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptLedgerError(f"Ledger is not valid JSON: {e}")

    if not isinstance(payload, list):
        raise CorruptLedgerError(
            f"Ledger must be a JSON array, got {type(payload).__name__}"
        )

    entries = []
    seen_ids = set()
    for position, record in enumerate(payload):
        if isinstance(record, dict) and isinstance(record.get("id"), (int, float)):
            # Older slots used millisecond timestamps as numeric ids
            record = {**record, "id": str(record["id"])}
        try:
            entry = Entry.model_validate(record)
        except PydanticValidationError as e:
            raise CorruptLedgerError(
                f"Invalid record at position {position}: {e.error_count()} errors"
            )
        if entry.id in seen_ids:
            raise CorruptLedgerError(f"Duplicate entry id: {entry.id}")
        seen_ids.add(entry.id)
        entries.append(entry)

    return entries
