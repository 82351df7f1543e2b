"""Shared test fixtures."""

import asyncio
from datetime import datetime, timezone

import pytest

from donation_tracker.audit import AuditLogger
from donation_tracker.models.audit import AuditEvent
from donation_tracker.models.transaction import Transaction
from donation_tracker.services.storage import InMemoryStorage
from donation_tracker.store import ThemePreference, TransactionStore


FIXED_NOW = 1_700_000_000.0


class RecordingAuditLogger(AuditLogger):
    """AuditLogger that also keeps every event for assertions."""

    def __init__(self):
        super().__init__()
        self.events: list[AuditEvent] = []

    async def log(self, event: AuditEvent) -> None:
        self.events.append(event)
        await super().log(event)

    def types(self) -> list[str]:
        return [event.event_type.value for event in self.events]


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def make_transaction(
    id: int,
    amount="10",
    category: str = "GoFundMe",
    is_income: bool = True,
    when: datetime = None,
    note: str = "",
) -> Transaction:
    return Transaction(
        id=id,
        amount=amount,
        category=category,
        is_income=is_income,
        date=when or utc(2024, 5, 1),
        note=note,
    )


@pytest.fixture
def run():
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def audit_logger():
    return RecordingAuditLogger()


@pytest.fixture
def store(storage, audit_logger):
    """Store whose clock never moves, so every add collides on the same millisecond."""
    return TransactionStore(storage, audit_logger, clock=lambda: FIXED_NOW)


@pytest.fixture
def theme(storage, audit_logger):
    return ThemePreference(storage, audit_logger)
