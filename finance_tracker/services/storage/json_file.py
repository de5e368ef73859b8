"""
JSON File Storage Implementation

DESIGN DECISION: The ledger lives in a single JSON file (the "slot"),
one file per slot name, because:
1. Users can open and read their data directly
2. No database setup required
3. The whole-ledger-per-write model maps onto one file write

TRADEOFFS:
- Every change rewrites the whole file (fine for a personal ledger)
- No concurrent writers (the ledger is single-user)

Writes go to a temporary file in the same directory and are moved into
place with os.replace, so a crash mid-write leaves the previous ledger
intact rather than a half-written one.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from finance_tracker.config import StorageSettings
from finance_tracker.models.entry import Entry
from finance_tracker.services.storage.interface import (
    LedgerStorageInterface,
    PersistenceError,
    dumps_ledger,
    loads_ledger,
)


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    File-backed ledger slot.

    The slot `entries` in directory `.ledger` is stored at
    `.ledger/entries.json`.
    """

    def __init__(
        self,
        directory: Path,
        slot: str = "entries",
        write_attempts: int = 3,
        retry_wait_seconds: float = 0.5,
    ):
        self._directory = Path(directory)
        self._slot = slot
        self._write_attempts = write_attempts
        self._retry_wait_seconds = retry_wait_seconds

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "JsonFileLedgerStorage":
        return cls(
            directory=settings.directory,
            slot=settings.slot,
            write_attempts=settings.write_attempts,
            retry_wait_seconds=settings.retry_wait_seconds,
        )

    @property
    def path(self) -> Path:
        return self._directory / f"{self._slot}.json"

    @property
    def source(self) -> str:
        return str(self.path)

    def load(self) -> Optional[list[Entry]]:
        """Read the slot file; None if it doesn't exist yet."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read ledger from {self.path}: {e}")

        return loads_ledger(text)

    def _write(self, text: str) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._directory,
            prefix=f".{self._slot}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(tmp_name, self.path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def save(self, entries: Sequence[Entry]) -> None:
        """Overwrite the slot file, retrying transient OS errors."""
        text = dumps_ledger(entries)
        retrying = Retrying(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(
                multiplier=self._retry_wait_seconds,
                max=self._retry_wait_seconds * 8,
            ),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._write(text)
        except OSError as e:
            raise PersistenceError(f"Failed to write ledger to {self.path}: {e}")
