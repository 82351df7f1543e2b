"""
Audit Logger

DESIGN DECISION: Every mutation and every storage failure is logged.
Storage failures never reach the user, so this log is the only place
they show up.

The audit logger:
- Is async so callers can await it next to storage calls
- Supports correlation IDs to trace the events of one user action
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from donation_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Renders AuditEvents as structured JSON log lines at the event's
    severity.
    """

    def __init__(self, logger_name: str = "donation_tracker"):
        self._logger = structlog.get_logger(logger_name)

    async def log(self, event: AuditEvent) -> None:
        """Log an audit event."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    async def log_transactions_loaded(self, count: int) -> None:
        await self.log(AuditEventBuilder.transactions_loaded(count))

    async def log_load_failed(self, error: str) -> None:
        await self.log(AuditEventBuilder.load_failed(error))

    async def log_transaction_added(
        self,
        transaction_id: int,
        amount: str,
        category: str,
        is_income: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            amount=amount,
            category=category,
            is_income=is_income,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_transaction_updated(
        self,
        transaction_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.transaction_updated(transaction_id, correlation_id))

    async def log_transaction_deleted(
        self,
        transaction_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.transaction_deleted(transaction_id, correlation_id))

    async def log_transaction_not_found(
        self,
        transaction_id: int,
        operation: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        event = AuditEventBuilder.transaction_not_found(
            transaction_id=transaction_id,
            operation=operation,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_save_failed(
        self,
        error: str,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.save_failed(error, count, correlation_id))

    async def log_amount_rejected(
        self,
        raw_amount: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.amount_rejected(raw_amount, reason, correlation_id))

    async def log_delete_declined(
        self,
        transaction_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.delete_declined(transaction_id, correlation_id))

    async def log_theme_loaded(self, mode: str) -> None:
        await self.log(AuditEventBuilder.theme_loaded(mode))

    async def log_theme_load_failed(self, error: str) -> None:
        await self.log(AuditEventBuilder.theme_load_failed(error))

    async def log_theme_toggled(self, mode: str) -> None:
        await self.log(AuditEventBuilder.theme_toggled(mode))

    async def log_theme_save_failed(self, error: str, mode: str) -> None:
        await self.log(AuditEventBuilder.theme_save_failed(error, mode))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a user action (e.g. saving the add form)
    and pass it through every call that action makes.
    """
    return uuid4()
