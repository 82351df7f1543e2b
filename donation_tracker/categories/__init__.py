"""Category registry package."""

from donation_tracker.categories.registry import (
    EXPENSE_CATEGORIES,
    FALLBACK_EXPENSE_COLOR,
    FALLBACK_ICON,
    FALLBACK_INCOME_COLOR,
    INCOME_CATEGORIES,
    OTHER_CATEGORY,
    categories_for,
    category_choices,
    color_of,
    default_category,
    find_category,
    icon_of,
    is_known_category,
)

__all__ = [
    "EXPENSE_CATEGORIES",
    "FALLBACK_EXPENSE_COLOR",
    "FALLBACK_ICON",
    "FALLBACK_INCOME_COLOR",
    "INCOME_CATEGORIES",
    "OTHER_CATEGORY",
    "categories_for",
    "category_choices",
    "color_of",
    "default_category",
    "find_category",
    "icon_of",
    "is_known_category",
]
