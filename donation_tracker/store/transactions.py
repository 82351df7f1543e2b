"""
Transaction Store

The single source of truth for the transaction list.

GUARANTEES:
- The in-memory list is sorted by date, newest first, after every mutation
  (a full stable re-sort, not an ordered insert)
- Every mutation writes the whole re-sorted list under the "transactions" key
- Totals are recomputed from the current list on every call

FAILURE POLICY (retain-optimistic):
- A failed load is logged and the store starts empty
- A failed save is logged and the in-memory change is kept; the next
  successful save writes the full list again, which heals the divergence
"""

import time
from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Callable, Optional, Union
from uuid import UUID

from pydantic import TypeAdapter, ValidationError

from donation_tracker.audit import AuditLogger
from donation_tracker.models.transaction import Totals, Transaction, TransactionFields
from donation_tracker.services.storage import KeyValueStorageInterface, StorageError


TRANSACTIONS_KEY = "transactions"

_transaction_list = TypeAdapter(list[Transaction])


def sort_newest_first(transactions: list[Transaction]) -> list[Transaction]:
    """Stable sort by date descending; ties keep their current order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def decode_transactions(payload: str) -> list[Transaction]:
    """
    Parse the stored payload.

    Raises:
        ValidationError: If the payload is not a valid list of records
        ValueError: If two records share an id
    """
    transactions = _transaction_list.validate_json(payload)
    ids = [t.id for t in transactions]
    if len(ids) != len(set(ids)):
        raise ValueError("Stored transactions contain duplicate ids")
    return transactions


def encode_transactions(transactions: list[Transaction]) -> str:
    return _transaction_list.dump_json(transactions, by_alias=True).decode("utf-8")


class TransactionStore:
    """
    Owns the transaction list and its persistence.

    Construct one per process and hand it to every consumer.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._clock = clock or time.time
        self._transactions: list[Transaction] = []

    @property
    def transactions(self) -> list[Transaction]:
        """Snapshot of the current list, newest first."""
        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def get(self, transaction_id: int) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def recent(self, limit: int) -> list[Transaction]:
        """The newest `limit` transactions."""
        return self._transactions[:max(limit, 0)]

    def totals(self) -> Totals:
        return Totals.from_transactions(self._transactions)

    async def load(self) -> list[Transaction]:
        """
        Read the persisted list.

        Missing data means an empty list. Unreadable storage or a malformed
        payload is logged and also yields an empty list.
        """
        try:
            payload = await self._storage.get_item(TRANSACTIONS_KEY)
            loaded = decode_transactions(payload) if payload else []
        except (StorageError, ValidationError, ValueError) as e:
            await self._audit_logger.log_load_failed(str(e))
            self._transactions = []
            return self.transactions

        self._transactions = sort_newest_first(loaded)
        await self._audit_logger.log_transactions_loaded(len(self._transactions))
        return self.transactions

    async def add(
        self,
        amount: Union[Decimal, float, int, str],
        category: str,
        is_income: bool,
        date: Union[datetime, date_type, str],
        note: str = "",
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Create a transaction and persist the list.

        Raises:
            ValidationError: If amount is not > 0 (nothing is changed)
        """
        transaction = Transaction(
            id=self._next_id(),
            amount=amount,
            category=category,
            is_income=is_income,
            date=date,
            note=note,
            is_pinned=False,
        )

        self._transactions = sort_newest_first([transaction, *self._transactions])

        await self._audit_logger.log_transaction_added(
            transaction_id=transaction.id,
            amount=str(transaction.amount),
            category=transaction.category,
            is_income=transaction.is_income,
            correlation_id=correlation_id,
        )
        await self._persist(correlation_id)
        return transaction

    async def update(
        self,
        transaction_id: int,
        fields: TransactionFields,
        correlation_id: Optional[UUID] = None,
    ) -> Optional[Transaction]:
        """
        Replace every field except the id of one transaction.

        An unknown id leaves the list unchanged and returns None.
        """
        updated = None
        replaced = []
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                updated = transaction.replaced_by(fields)
                replaced.append(updated)
            else:
                replaced.append(transaction)

        self._transactions = sort_newest_first(replaced)

        if updated is None:
            await self._audit_logger.log_transaction_not_found(
                transaction_id, "update", correlation_id
            )
        else:
            await self._audit_logger.log_transaction_updated(transaction_id, correlation_id)

        await self._persist(correlation_id)
        return updated

    async def delete(
        self,
        transaction_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Remove one transaction. Returns False if the id was not present."""
        remaining = [t for t in self._transactions if t.id != transaction_id]
        found = len(remaining) != len(self._transactions)

        self._transactions = sort_newest_first(remaining)

        if found:
            await self._audit_logger.log_transaction_deleted(transaction_id, correlation_id)
        else:
            await self._audit_logger.log_transaction_not_found(
                transaction_id, "delete", correlation_id
            )

        await self._persist(correlation_id)
        return found

    def _next_id(self) -> int:
        """Creation time in epoch milliseconds, bumped past any existing id."""
        candidate = int(self._clock() * 1000)
        if self._transactions:
            highest = max(t.id for t in self._transactions)
            if candidate <= highest:
                candidate = highest + 1
        return candidate

    async def _persist(self, correlation_id: Optional[UUID] = None) -> bool:
        """Write the full list. Failures are logged, never raised."""
        try:
            await self._storage.set_item(
                TRANSACTIONS_KEY,
                encode_transactions(self._transactions),
            )
            return True
        except StorageError as e:
            await self._audit_logger.log_save_failed(
                str(e), len(self._transactions), correlation_id
            )
            return False
