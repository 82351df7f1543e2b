"""Store package: the transaction list and the theme preference."""

from donation_tracker.store.theme import THEME_KEY, ThemePreference
from donation_tracker.store.transactions import (
    TRANSACTIONS_KEY,
    TransactionStore,
    decode_transactions,
    encode_transactions,
    sort_newest_first,
)

__all__ = [
    "THEME_KEY",
    "TRANSACTIONS_KEY",
    "ThemePreference",
    "TransactionStore",
    "decode_transactions",
    "encode_transactions",
    "sort_newest_first",
]
