"""
Transaction Models

These models define the one entity the tracker persists: a Transaction.
They are designed to:
1. Reject non-positive amounts at construction time
2. Read and write the camelCase wire format (isIncome, isPinned)
3. Keep every date timezone-aware so sorting never mixes naive and aware values

DESIGN DECISION: Direction (income vs. expense) lives in is_income only.
An amount is always a positive magnitude, never a signed number.
"""

import math
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Iterable

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


def to_utc_datetime(value: Any) -> Any:
    """
    Normalise a date-like value to an aware UTC datetime.

    Bare dates (objects or "YYYY-MM-DD" strings) become midnight UTC.
    Naive datetimes are taken as UTC. Anything else is left for pydantic.
    """
    if isinstance(value, str) and len(value) == 10:
        try:
            value = date.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    return value


def format_wire_datetime(value: datetime) -> str:
    """Render a datetime as 2024-05-01T10:00:00.000Z."""
    value = value.astimezone(timezone.utc)
    millis = value.microsecond // 1000
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{millis:03d}Z"


class TransactionFields(BaseModel):
    """
    Every field of a transaction except its id.

    This is what an update replaces wholesale.
    """
    model_config = ConfigDict(populate_by_name=True)

    amount: Decimal = Field(
        ...,
        gt=0,
        description="Positive magnitude of the transaction"
    )
    category: str = Field(
        ...,
        description="Category value; unknown values are kept as-is"
    )
    is_income: bool = Field(
        ...,
        alias="isIncome",
        description="True for income, False for expense"
    )
    date: datetime = Field(
        ...,
        description="When the donation happened (UTC)"
    )
    note: str = Field(
        default="",
        description="Free text, may be empty"
    )
    is_pinned: bool = Field(
        default=False,
        alias="isPinned",
        description="Reserved flag, stored but not used for display"
    )

    @field_validator('amount')
    @classmethod
    def amount_fits_wire(cls, v: Decimal) -> Decimal:
        """
        The stored amount is a JSON number (a double), so keep only what a
        double can carry. Overflow to infinity or underflow to zero is rejected.
        """
        as_float = float(v)
        if not math.isfinite(as_float) or as_float <= 0:
            raise ValueError(f"Amount {v} cannot be stored as a positive finite number")
        return Decimal(repr(as_float))

    @field_validator('date', mode='before')
    @classmethod
    def coerce_date(cls, v: Any) -> Any:
        return to_utc_datetime(v)

    @field_validator('date')
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        return to_utc_datetime(v)

    @field_validator('note', mode='before')
    @classmethod
    def none_note_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_serializer('amount', when_used='json')
    def serialize_amount(self, v: Decimal) -> float:
        # JSON number on the wire, not a string
        return float(v)

    @field_serializer('date', when_used='json')
    def serialize_date(self, v: datetime) -> str:
        return format_wire_datetime(v)


class Transaction(TransactionFields):
    """
    A recorded donation income or expense.

    The id is assigned once by the store and never changes.
    """

    id: int = Field(
        ...,
        description="Unique transaction id"
    )

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign implied by is_income."""
        return self.amount if self.is_income else -self.amount

    def editable_fields(self) -> TransactionFields:
        """Everything except the id."""
        return TransactionFields(**self.model_dump(exclude={"id"}))

    def replaced_by(self, fields: TransactionFields) -> "Transaction":
        """A copy carrying this id and every other value from fields."""
        return Transaction(id=self.id, **fields.model_dump())

    def to_wire(self) -> dict:
        """The exact record written under the transactions key."""
        return self.model_dump(mode="json", by_alias=True)


class Totals(BaseModel):
    """Aggregates derived from a full scan of the transaction list."""

    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")

    @classmethod
    def from_transactions(cls, transactions: Iterable[Transaction]) -> "Totals":
        income = Decimal("0")
        expense = Decimal("0")
        for transaction in transactions:
            if transaction.is_income:
                income += transaction.amount
            else:
                expense += transaction.amount
        return cls(
            total_income=income,
            total_expense=expense,
            balance=income - expense,
        )
