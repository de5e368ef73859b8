"""Input validation package."""

from finance_tracker.validation.validator import (
    EntryValidator,
    get_user_friendly_summary,
)

__all__ = ["EntryValidator", "get_user_friendly_summary"]
