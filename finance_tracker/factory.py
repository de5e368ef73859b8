"""
Application wiring.

Builds a ready-to-use LedgerStore from settings: picks the storage
backend, configures logging and loads the ledger.
"""

from typing import Optional

from finance_tracker.audit import AuditLogger, configure_logging
from finance_tracker.config import Settings, StorageSettings, get_settings
from finance_tracker.ledger import LedgerStore
from finance_tracker.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
)
from finance_tracker.validation import EntryValidator


def create_storage(settings: StorageSettings) -> LedgerStorageInterface:
    """Storage backend named by `settings.backend`."""
    if settings.backend == "memory":
        return InMemoryLedgerStorage(slot=settings.slot)
    return JsonFileLedgerStorage.from_settings(settings)


def create_ledger_store(
    settings: Optional[Settings] = None,
    storage: Optional[LedgerStorageInterface] = None,
    configure_logs: bool = True,
) -> LedgerStore:
    """
    Factory function to create a loaded ledger store.

    Args:
        settings: Settings to use (default: cached global settings)
        storage: Storage backend override, e.g. an in-memory slot in tests
        configure_logs: Whether to (re)configure structlog

    Returns:
        A LedgerStore on which load() has already been called
    """
    settings = settings or get_settings()
    app_settings = settings.app

    if configure_logs:
        configure_logging(app_settings.log_level, app_settings.json_logs)

    store = LedgerStore(
        storage=storage or create_storage(settings.storage),
        validator=EntryValidator(app_settings),
        audit_logger=AuditLogger(),
    )
    store.load()
    return store
