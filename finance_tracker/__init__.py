"""
Finance Tracker - Source Package

A small personal ledger for recording income and expenses,
with running totals and a single persisted storage slot.

DESIGN PRINCIPLES:
1. One store owns the ledger → callers only see snapshots
2. Reject bad input before anything changes
3. Totals are always derived, never stored
4. A storage failure never loses what is in memory
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
