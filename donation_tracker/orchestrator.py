"""
Main Orchestrator for Donation Tracker

This module ties the components together and defines the flows the
presentation layer calls:
1. Add (raw form input → validate → store.add)
2. Edit (raw form input → validate → store.update)
3. Delete (explicit confirmation → store.delete)

DESIGN DECISION: The orchestrator enforces the boundaries:
- An invalid amount never reaches the store
- Nothing is deleted without confirmation
- Every step is logged

The store and the theme preference are created once by
create_app_components() and passed to whoever needs them.
"""

from datetime import date, datetime
from typing import NamedTuple, Optional, Union
from uuid import UUID

from donation_tracker.audit import AuditLogger, create_correlation_id
from donation_tracker.models.transaction import Transaction, TransactionFields
from donation_tracker.models.validation import ValidationResult
from donation_tracker.services.storage import JsonFileStorage, KeyValueStorageInterface
from donation_tracker.store import ThemePreference, TransactionStore
from donation_tracker.validation import EntryValidator


class FlowOutcome(NamedTuple):
    """Result of an add or edit submission."""
    transaction: Optional[Transaction]
    message: str
    validation: ValidationResult

    @property
    def ok(self) -> bool:
        return self.transaction is not None


class TransactionFlow:
    """
    Orchestrates user-initiated mutations.

    Flow:
    1. Validate → parse the amount, check the category
    2. Reject → invalid amount: return the message, store untouched
    3. Apply → call the store
    """

    def __init__(
        self,
        store: TransactionStore,
        validator: Optional[EntryValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._validator = validator or EntryValidator()
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def store(self) -> TransactionStore:
        return self._store

    async def _reject(
        self,
        raw_amount: Optional[str],
        validation: ValidationResult,
        correlation_id: UUID,
    ) -> FlowOutcome:
        message = validation.first_error or "Ungültige Eingabe"
        amount_issue = next(
            (issue for issue in validation.issues if issue.field == "amount"),
            None,
        )
        await self._audit_logger.log_amount_rejected(
            raw_amount="" if raw_amount is None else str(raw_amount),
            reason=amount_issue.issue_type if amount_issue else "invalid",
            correlation_id=correlation_id,
        )
        return FlowOutcome(None, message, validation)

    async def submit_new(
        self,
        raw_amount: Optional[str],
        category: str,
        is_income: bool,
        when: Union[datetime, date],
        note: str = "",
        correlation_id: Optional[UUID] = None,
    ) -> FlowOutcome:
        """
        Validate the add form and create the transaction.

        Returns:
            FlowOutcome with the new transaction, or with None and the
            message to show when the amount was rejected
        """
        correlation_id = correlation_id or create_correlation_id()

        validation = self._validator.validate(raw_amount, category, is_income)
        if not validation.is_valid:
            return await self._reject(raw_amount, validation, correlation_id)

        transaction = await self._store.add(
            amount=validation.amount,
            category=category,
            is_income=is_income,
            date=when,
            note=(note or "").strip(),
            correlation_id=correlation_id,
        )
        kind = "Einnahme" if is_income else "Ausgabe"
        return FlowOutcome(transaction, f"{kind} gespeichert", validation)

    async def submit_edit(
        self,
        transaction_id: int,
        raw_amount: Optional[str],
        category: str,
        when: Union[datetime, date],
        note: str = "",
        correlation_id: Optional[UUID] = None,
    ) -> FlowOutcome:
        """
        Validate the edit form and replace the transaction.

        is_income and is_pinned are carried over from the existing entry.
        """
        correlation_id = correlation_id or create_correlation_id()

        existing = self._store.get(transaction_id)
        if existing is None:
            await self._audit_logger.log_transaction_not_found(
                transaction_id, "edit", correlation_id
            )
            return FlowOutcome(
                None,
                "Eintrag nicht gefunden",
                ValidationResult(),
            )

        validation = self._validator.validate(raw_amount, category, existing.is_income)
        if not validation.is_valid:
            return await self._reject(raw_amount, validation, correlation_id)

        fields = TransactionFields(
            amount=validation.amount,
            category=category,
            is_income=existing.is_income,
            date=when,
            note=(note or "").strip(),
            is_pinned=existing.is_pinned,
        )
        updated = await self._store.update(transaction_id, fields, correlation_id)
        return FlowOutcome(updated, "Eintrag aktualisiert", validation)

    async def delete(
        self,
        transaction_id: int,
        confirmed: bool,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """
        Delete a transaction once the user has confirmed.

        Returns True only if something was deleted.
        """
        correlation_id = correlation_id or create_correlation_id()

        if not confirmed:
            await self._audit_logger.log_delete_declined(transaction_id, correlation_id)
            return False

        return await self._store.delete(transaction_id, correlation_id)


class AppComponents(NamedTuple):
    store: TransactionStore
    theme: ThemePreference
    flow: TransactionFlow
    storage: KeyValueStorageInterface


def create_app_components(
    storage: Optional[KeyValueStorageInterface] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        storage: Key-value backend. Defaults to the JSON file configured
                 by DONATION_STORAGE_DATA_DIR / DONATION_STORAGE_FILE_NAME.

    Nothing is loaded here; call load_app_state() once at startup.
    """
    storage = storage or JsonFileStorage()
    audit_logger = AuditLogger()

    store = TransactionStore(storage, audit_logger)
    theme = ThemePreference(storage, audit_logger)
    flow = TransactionFlow(store, audit_logger=audit_logger)

    return AppComponents(store=store, theme=theme, flow=flow, storage=storage)


async def load_app_state(components: AppComponents) -> AppComponents:
    """Load the transaction list and the theme. Never raises on bad data."""
    await components.store.load()
    await components.theme.load()
    return components
