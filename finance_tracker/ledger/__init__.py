"""Ledger package: the store and the pure derivations it uses."""

from finance_tracker.ledger.store import LedgerStore
from finance_tracker.ledger.totals import compute_totals, filter_entries

__all__ = ["LedgerStore", "compute_totals", "filter_entries"]
