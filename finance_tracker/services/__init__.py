"""Services package."""

from finance_tracker.services.storage import (
    CorruptLedgerError,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    PersistenceError,
    StorageError,
)

__all__ = [
    # Storage services
    "CorruptLedgerError",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "PersistenceError",
    "StorageError",
]
