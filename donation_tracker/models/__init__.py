"""
Data Models Package

This package contains all Pydantic models used in the Donation Tracker.
Everything that is persisted or logged must conform to these schemas.
"""

from donation_tracker.models.transaction import (
    Totals,
    Transaction,
    TransactionFields,
)
from donation_tracker.models.category import Category
from donation_tracker.models.theme import (
    DARK_PALETTE,
    LIGHT_PALETTE,
    ThemeMode,
    ThemePalette,
    palette_for,
)
from donation_tracker.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from donation_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Transaction models
    "Totals",
    "Transaction",
    "TransactionFields",
    # Categories
    "Category",
    # Theme
    "DARK_PALETTE",
    "LIGHT_PALETTE",
    "ThemeMode",
    "ThemePalette",
    "palette_for",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
