"""Filter engine package."""

from donation_tracker.filters.engine import (
    TransactionFilter,
    empty_view_message,
    matches_search,
    view,
)

__all__ = ["TransactionFilter", "empty_view_message", "matches_search", "view"]
