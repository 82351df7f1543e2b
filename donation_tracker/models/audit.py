"""
Audit Models for Donation Tracker

Every mutation of the transaction list and every storage failure is
described by an AuditEvent. Events are rendered as structured log lines;
they are not persisted anywhere.

DESIGN DECISION: Failures that the user never sees (load and save errors)
still produce an error-severity event, so a silent fallback is never
invisible in the logs.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Transaction list
    TRANSACTIONS_LOADED = "transactions_loaded"
    TRANSACTIONS_LOAD_FAILED = "transactions_load_failed"
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    TRANSACTION_NOT_FOUND = "transaction_not_found"
    TRANSACTIONS_SAVE_FAILED = "transactions_save_failed"

    # User input
    AMOUNT_VALIDATION_FAILED = "amount_validation_failed"
    DELETE_DECLINED = "delete_declined"

    # Theme
    THEME_LOADED = "theme_loaded"
    THEME_LOAD_FAILED = "theme_load_failed"
    THEME_TOGGLED = "theme_toggled"
    THEME_SAVE_FAILED = "theme_save_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    entity_id is the integer transaction id when the event is about one
    transaction.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    # Context
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'transaction', 'theme')"
    )
    entity_id: Optional[int] = None
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate events caused by one user action"
    )

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_message: Optional[str] = None
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.transaction_added(transaction_id, ...)
        event = AuditEventBuilder.save_failed(error, count)
    """

    @staticmethod
    def transactions_loaded(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_LOADED,
            entity_type="transaction_list",
            description=f"Loaded {count} transactions",
            details={"count": count},
        )

    @staticmethod
    def load_failed(error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="transaction_list",
            description="Failed to load transactions, starting empty",
            error_message=error,
        )

    @staticmethod
    def transaction_added(
        transaction_id: int,
        amount: str,
        category: str,
        is_income: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        kind = "income" if is_income else "expense"
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Added {kind} of {amount} ({category})",
            details={
                "amount": amount,
                "category": category,
                "is_income": is_income,
            },
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(
        transaction_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Updated transaction {transaction_id}",
            is_user_action=True,
        )

    @staticmethod
    def transaction_deleted(
        transaction_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_DELETED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Deleted transaction {transaction_id}",
            is_user_action=True,
        )

    @staticmethod
    def transaction_not_found(
        transaction_id: int,
        operation: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"No transaction {transaction_id} to {operation}",
            details={"operation": operation},
        )

    @staticmethod
    def save_failed(
        error: str,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="transaction_list",
            correlation_id=correlation_id,
            description="Failed to save transactions; in-memory list kept",
            details={"count": count},
            error_message=error,
        )

    @staticmethod
    def amount_rejected(
        raw_amount: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AMOUNT_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="transaction",
            correlation_id=correlation_id,
            description="Rejected amount input",
            details={"raw_amount": raw_amount, "reason": reason},
            is_user_action=True,
        )

    @staticmethod
    def delete_declined(
        transaction_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DELETE_DECLINED,
            entity_type="transaction",
            entity_id=transaction_id,
            correlation_id=correlation_id,
            description=f"Delete of transaction {transaction_id} not confirmed",
            is_user_action=True,
        )

    @staticmethod
    def theme_loaded(mode: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.THEME_LOADED,
            entity_type="theme",
            description=f"Theme loaded: {mode}",
            details={"mode": mode},
        )

    @staticmethod
    def theme_load_failed(error: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.THEME_LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="theme",
            description="Failed to load theme, using light",
            error_message=error,
        )

    @staticmethod
    def theme_toggled(mode: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.THEME_TOGGLED,
            entity_type="theme",
            description=f"Theme switched to {mode}",
            details={"mode": mode},
            is_user_action=True,
        )

    @staticmethod
    def theme_save_failed(error: str, mode: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.THEME_SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="theme",
            description=f"Failed to save theme {mode}; in-memory value kept",
            details={"mode": mode},
            error_message=error,
        )
