"""
Entry Validation

DESIGN DECISION: Amount input is validated before the store is touched.
An invalid amount blocks the entry and the user sees one message; nothing
is written.

Category checks only warn. The store accepts any category string and the
registry falls back to a default color and icon for unknown ones.

IMPORTANT: Validation NEVER silently fixes issues beyond the one accepted
input convenience: a comma is read as the decimal separator ("12,50").
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Optional

from donation_tracker.categories import is_known_category
from donation_tracker.models.validation import ValidationIssue, ValidationResult


INVALID_AMOUNT_MESSAGE = "Bitte gib einen gültigen Betrag > 0 ein."


class AmountValidationError(ValueError):
    """Amount input is empty, not a number, or not greater than zero."""

    def __init__(self, raw_amount: str, reason: str):
        self.raw_amount = raw_amount
        self.reason = reason
        super().__init__(INVALID_AMOUNT_MESSAGE)


def parse_amount(raw_amount: Optional[str]) -> Decimal:
    """
    Parse user input such as "12,50" or "12.50".

    Raises:
        AmountValidationError: If the input is not a finite number > 0
    """
    raw = "" if raw_amount is None else str(raw_amount)
    text = raw.strip().replace(",", ".")
    if not text:
        raise AmountValidationError(raw, "empty")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise AmountValidationError(raw, "not_a_number")

    # "1e400" is a finite Decimal but overflows the stored double
    if not amount.is_finite() or not math.isfinite(float(amount)):
        raise AmountValidationError(raw, "not_finite")
    if amount <= 0 or float(amount) == 0:
        raise AmountValidationError(raw, "not_positive")
    return amount


class EntryValidator:
    """Validates the add/edit form before anything reaches the store."""

    def validate(
        self,
        raw_amount: Optional[str],
        category: str,
        is_income: bool,
    ) -> ValidationResult:
        issues = []
        amount = None

        try:
            amount = parse_amount(raw_amount)
        except AmountValidationError as e:
            issues.append(ValidationIssue(
                field="amount",
                issue_type=e.reason,
                message=str(e),
                severity="error",
            ))

        if not is_known_category(category, is_income):
            kind = "Einnahmen" if is_income else "Ausgaben"
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message=f"Kategorie '{category}' ist keine bekannte Kategorie für {kind}",
                severity="warning",
            ))

        return ValidationResult(amount=amount, issues=issues)
