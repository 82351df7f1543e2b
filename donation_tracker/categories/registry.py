"""
Category Registry

Static income and expense categories. Each set holds exactly one
catch-all "Sonstiges" entry, and the first entry of each set is the
default for a new transaction.

Lookups never raise: a category string that is not in the registry gets
the fallback color for its kind and the fallback icon.
"""

from typing import Optional

from donation_tracker.models.category import Category


INCOME_CATEGORIES: tuple[Category, ...] = (
    Category(label="GoFundMe", value="GoFundMe", color="#22c55e", icon="heart"),
    Category(label="Allgemeine Spenden", value="Allgemeine Spenden", color="#10b981", icon="gift"),
    Category(label="Familien-Spende (privat)", value="Familien-Spende (privat)", color="#0ea5e9", icon="users"),
    Category(label="Sonstiges", value="Sonstiges", color="#a78bfa", icon="more-horizontal"),
)

EXPENSE_CATEGORIES: tuple[Category, ...] = (
    Category(label="Bank-Überweisung", value="Bank-Überweisung", color="#ef4444", icon="credit-card"),
    Category(label="Geld an ein Familienmitglied", value="Geld an ein Familienmitglied", color="#f97316", icon="user"),
    Category(label="Bargeld", value="Bargeld", color="#eab308", icon="dollar-sign"),
    Category(label="Sonstiges", value="Sonstiges", color="#a78bfa", icon="more-horizontal"),
)

OTHER_CATEGORY = "Sonstiges"

FALLBACK_INCOME_COLOR = "#16a34a"
FALLBACK_EXPENSE_COLOR = "#ef4444"
FALLBACK_ICON = "circle"


def categories_for(is_income: bool) -> tuple[Category, ...]:
    """The category set for one kind of transaction."""
    return INCOME_CATEGORIES if is_income else EXPENSE_CATEGORIES


def find_category(category: str, is_income: bool) -> Optional[Category]:
    for entry in categories_for(is_income):
        if entry.value == category:
            return entry
    return None


def is_known_category(category: str, is_income: bool) -> bool:
    return find_category(category, is_income) is not None


def default_category(is_income: bool) -> str:
    """Category preselected when adding a new transaction."""
    return categories_for(is_income)[0].value


def color_of(category: str, is_income: bool) -> str:
    entry = find_category(category, is_income)
    if entry is None:
        return FALLBACK_INCOME_COLOR if is_income else FALLBACK_EXPENSE_COLOR
    return entry.color


def icon_of(category: str, is_income: bool) -> str:
    entry = find_category(category, is_income)
    return entry.icon if entry else FALLBACK_ICON


def category_choices(current: str, is_income: bool) -> list[str]:
    """
    Values offered when editing a transaction.

    A category outside the registry is kept as the last choice so saving
    an edit never rewrites it.
    """
    values = [entry.value for entry in categories_for(is_income)]
    if current not in values:
        values.append(current)
    return values
