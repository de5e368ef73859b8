"""
Pure derivations over a list of entries.

Nothing here touches the store, so totals and filtered views can be
computed for any snapshot (including one a caller kept from earlier).
"""

from decimal import Decimal
from typing import Iterable, Union

from finance_tracker.models.entry import Entry, EntryFilter, EntryKind, Totals


def compute_totals(entries: Iterable[Entry]) -> Totals:
    """
    Sum income and expense amounts.

    Decimal addition is exact, so there is no rounding until an
    amount is formatted for display.
    """
    income = Decimal("0")
    expense = Decimal("0")
    for entry in entries:
        if entry.kind == EntryKind.INCOME:
            income += entry.amount
        else:
            expense += entry.amount
    return Totals(total_income=income, total_expense=expense)


def filter_entries(
    entries: Iterable[Entry],
    entry_filter: Union[EntryFilter, str] = EntryFilter.ALL,
) -> list[Entry]:
    """Entries matching `entry_filter`, in their original order."""
    entry_filter = EntryFilter(entry_filter)
    return [entry for entry in entries if entry_filter.matches(entry)]
