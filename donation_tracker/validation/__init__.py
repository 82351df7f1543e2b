"""Validation package."""

from donation_tracker.validation.validator import (
    INVALID_AMOUNT_MESSAGE,
    AmountValidationError,
    EntryValidator,
    parse_amount,
)

__all__ = [
    "INVALID_AMOUNT_MESSAGE",
    "AmountValidationError",
    "EntryValidator",
    "parse_amount",
]
