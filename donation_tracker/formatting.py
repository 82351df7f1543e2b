"""Display formatting for amounts and dates (German conventions)."""

import html
from datetime import datetime
from decimal import Decimal
from typing import Union

from donation_tracker.models.transaction import Transaction


def format_eur(amount: Union[Decimal, float, int], symbol: str = "€") -> str:
    """Format an amount as '€1234,56'; non-finite values render as zero."""
    value = Decimal(str(amount))
    if not value.is_finite():
        value = Decimal("0")
    return f"{symbol}{value:.2f}".replace(".", ",")


def format_signed(amount: Union[Decimal, float, int], is_income: bool, symbol: str = "€") -> str:
    """Format with the direction sign, e.g. '+ €50,00' or '- €20,00'."""
    sign = "+" if is_income else "-"
    return f"{sign} {format_eur(amount, symbol)}"


def format_date(value: datetime) -> str:
    """Day-level date as shown in lists, e.g. '01.05.2024'."""
    return value.strftime("%d.%m.%Y")


def transaction_row_html(
    transaction: Transaction,
    color: str,
    icon: str,
    symbol: str = "€",
) -> str:
    """
    Markup for one list row.

    Category and note are user text and are always HTML-escaped.
    """
    category = html.escape(transaction.category)
    note = f" • {html.escape(transaction.note)}" if transaction.note else ""
    amount = html.escape(format_signed(transaction.amount, transaction.is_income, symbol))
    return f"""
    <div class="tx-row" style="border-left: 5px solid {color};">
        <strong>{category}</strong> <small>({icon})</small><br/>
        <small>{format_date(transaction.date)}{note}</small>
        <span style="float: right; color: {color};">
            {amount}
        </span>
    </div>
    """
