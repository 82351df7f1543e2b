"""
Filter Engine

DESIGN DECISION: Filtering is a pure projection of the store's list.
Same inputs, same output; no I/O and no hidden state. The store already
keeps the list newest first, so the engine never reorders anything.

Filters combine with AND:
1. kind (income or expense)
2. selected categories (OR across the selection; empty selection = all)
3. search text (case-insensitive substring of category or note; empty = all)
"""

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from donation_tracker.models.transaction import Transaction


def matches_search(transaction: Transaction, search_text: str) -> bool:
    if search_text == "":
        return True
    needle = search_text.lower()
    if needle in transaction.category.lower():
        return True
    return bool(transaction.note) and needle in transaction.note.lower()


def view(
    transactions: Iterable[Transaction],
    is_income: bool,
    selected_categories: Iterable[str] = (),
    search_text: str = "",
) -> list[Transaction]:
    """
    The transactions one screen shows.

    Args:
        transactions: Full list from the store, newest first
        is_income: Which kind the screen lists
        selected_categories: Category values to keep; empty keeps all
        search_text: Query matched against category and note

    Returns:
        Matching transactions in input order
    """
    selected = set(selected_categories)
    return [
        t for t in transactions
        if t.is_income == is_income
        and (not selected or t.category in selected)
        and matches_search(t, search_text)
    ]


class TransactionFilter(BaseModel):
    """
    Filter state of one list screen.

    Immutable; toggling a category or changing the search returns a new
    filter.
    """
    model_config = ConfigDict(frozen=True)

    selected_categories: tuple[str, ...] = Field(
        default=(),
        description="Selected category values, in the order they were picked"
    )
    search_text: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.selected_categories) or self.search_text != ""

    def is_selected(self, category: str) -> bool:
        return category in self.selected_categories

    def toggle_category(self, category: str) -> "TransactionFilter":
        """Select the category, or deselect it if it was selected."""
        if category in self.selected_categories:
            selected = tuple(c for c in self.selected_categories if c != category)
        else:
            selected = (*self.selected_categories, category)
        return self.model_copy(update={"selected_categories": selected})

    def with_search(self, search_text: str) -> "TransactionFilter":
        return self.model_copy(update={"search_text": search_text})

    def cleared(self) -> "TransactionFilter":
        return TransactionFilter()

    def apply(
        self,
        transactions: Iterable[Transaction],
        is_income: bool,
    ) -> list[Transaction]:
        return view(transactions, is_income, self.selected_categories, self.search_text)


def empty_view_message(transactions: Iterable[Transaction], is_income: bool) -> str:
    """
    Text for a list screen with nothing to show.

    Distinguishes "no entries of this kind yet" from "filters hide everything".
    """
    if not any(t.is_income == is_income for t in transactions):
        return "Noch keine Einnahmen vorhanden" if is_income else "Noch keine Ausgaben vorhanden"
    return "Keine Einträge entsprechen den Filtern"
