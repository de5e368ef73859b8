"""
Storage Services Package

Provides the abstract ledger storage interface and two implementations:
a JSON file slot for real use and an in-memory slot for tests.
"""

from finance_tracker.services.storage.interface import (
    CorruptLedgerError,
    LedgerStorageInterface,
    PersistenceError,
    StorageError,
    dumps_ledger,
    loads_ledger,
)
from finance_tracker.services.storage.json_file import JsonFileLedgerStorage
from finance_tracker.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interface
    "LedgerStorageInterface",
    "dumps_ledger",
    "loads_ledger",
    # Exceptions
    "CorruptLedgerError",
    "PersistenceError",
    "StorageError",
    # Implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]
