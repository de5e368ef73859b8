"""Shared fixtures: an in-memory slot, a fixed clock and predictable ids."""

from datetime import date
from itertools import count

import pytest

from finance_tracker.config import AppSettings
from finance_tracker.ledger import LedgerStore
from finance_tracker.services.storage import InMemoryLedgerStorage
from finance_tracker.validation import EntryValidator


TODAY = date(2024, 12, 15)


class Clock:
    """Settable stand-in for date.today."""

    def __init__(self, current: date = TODAY):
        self.current = current

    def __call__(self) -> date:
        return self.current


@pytest.fixture
def app_settings():
    return AppSettings(max_description_length=50, max_entry_amount=1_000_000.0)


@pytest.fixture
def validator(app_settings):
    return EntryValidator(app_settings)


@pytest.fixture
def storage():
    return InMemoryLedgerStorage()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def store(storage, validator, clock):
    ids = count(1)
    ledger = LedgerStore(
        storage=storage,
        validator=validator,
        today=clock,
        id_factory=lambda: f"entry-{next(ids)}",
    )
    ledger.load()
    return ledger
