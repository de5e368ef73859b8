"""
In-Memory Storage Implementation

Keeps serialized ledgers in a dict of slot name -> JSON text, the same
shape a browser's local storage has. Entries still go through the slot
format on every save and load, so a round trip here exercises the same
encoding as the file backend.

Used for tests and for the `memory` backend (nothing survives the
process).
"""

from typing import Optional, Sequence

from finance_tracker.models.entry import Entry
from finance_tracker.services.storage.interface import (
    LedgerStorageInterface,
    PersistenceError,
    dumps_ledger,
    loads_ledger,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Dict-backed ledger slot with switchable failure modes."""

    def __init__(
        self,
        slot: str = "entries",
        slots: Optional[dict[str, str]] = None,
    ):
        self._slot = slot
        self.slots = slots if slots is not None else {}
        self.fail_reads = False
        self.fail_writes = False
        self.save_count = 0

    @property
    def source(self) -> str:
        return f"memory:{self._slot}"

    @property
    def raw(self) -> Optional[str]:
        """The JSON text currently in the slot."""
        return self.slots.get(self._slot)

    def load(self) -> Optional[list[Entry]]:
        if self.fail_reads:
            raise PersistenceError(f"Slot {self._slot!r} is unavailable")
        text = self.slots.get(self._slot)
        if text is None:
            return None
        return loads_ledger(text)

    def save(self, entries: Sequence[Entry]) -> None:
        if self.fail_writes:
            raise PersistenceError(f"Slot {self._slot!r} is not writable")
        self.slots[self._slot] = dumps_ledger(entries)
        self.save_count += 1
