"""
Streamlit Frontend for Donation Tracker

Three screens, like the mobile app it replaces:
1. Home - totals dashboard, latest entries, quick add
2. Einnahmen - income list with filter bar
3. Ausgaben - expense list with filter bar

The UI never touches storage. Every mutation goes through
TransactionFlow, which validates amounts and requires delete confirmation.
"""

import asyncio
from datetime import date, datetime, time, timezone

import streamlit as st

from donation_tracker.categories import (
    categories_for,
    category_choices,
    color_of,
    default_category,
    icon_of,
)
from donation_tracker.config import get_settings
from donation_tracker.filters import TransactionFilter, empty_view_message
from donation_tracker.formatting import format_eur, transaction_row_html
from donation_tracker.models.transaction import Transaction
from donation_tracker.orchestrator import AppComponents, create_app_components, load_app_state


st.set_page_config(
    page_title="Spenden-Tracker",
    page_icon="💶",
    layout="centered",
    initial_sidebar_state="expanded",
)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components() -> AppComponents:
    """Create and load the application components once per server process."""
    return run_async(load_app_state(create_app_components()))


def apply_theme(components: AppComponents):
    palette = components.theme.palette
    st.markdown(f"""
    <style>
        .stApp {{
            background-color: {palette.primary};
            color: {palette.text};
        }}
        .stats-box {{
            padding: 12px;
            background-color: {palette.card};
            border-radius: 10px;
            border: 1px solid {palette.secondary};
            margin: 4px 0;
        }}
        .tx-row {{
            padding: 8px 12px;
            background-color: {palette.card};
            border-radius: 8px;
            margin: 4px 0;
        }}
        .big-number {{
            font-size: 1.6em;
            font-weight: bold;
            color: {palette.text};
        }}
    </style>
    """, unsafe_allow_html=True)


def to_utc_midnight(value: date) -> datetime:
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def main():
    """Main application entry point."""
    components = get_components()
    apply_theme(components)

    st.sidebar.title("💶 Spenden-Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigation",
        ["🏠 Home", "📈 Einnahmen", "📉 Ausgaben"],
        index=0,
    )

    st.sidebar.markdown("---")
    label = "☀️ Helles Design" if components.theme.is_dark else "🌙 Dunkles Design"
    if st.sidebar.button(label):
        run_async(components.theme.toggle())
        st.rerun()

    if page == "🏠 Home":
        render_home_page(components)
    elif page == "📈 Einnahmen":
        render_list_page(components, is_income=True)
    elif page == "📉 Ausgaben":
        render_list_page(components, is_income=False)


def render_dashboard(components: AppComponents):
    totals = components.store.totals()
    symbol = get_settings().app.currency_symbol

    col1, col2, col3 = st.columns(3)
    for column, title, value in (
        (col1, "Einnahmen", totals.total_income),
        (col2, "Ausgaben", totals.total_expense),
        (col3, "Saldo", totals.balance),
    ):
        with column:
            st.markdown(f"""
            <div class="stats-box">
                <div>{title}</div>
                <div class="big-number">{format_eur(value, symbol)}</div>
            </div>
            """, unsafe_allow_html=True)


def render_home_page(components: AppComponents):
    st.title("🏠 Übersicht")
    render_dashboard(components)

    st.markdown("---")
    kind = st.radio("Neuer Eintrag", ["Einnahme", "Ausgabe"], horizontal=True)
    render_add_form(components, is_income=(kind == "Einnahme"), form_key="home")

    st.subheader("Letzte Transaktionen")
    limit = get_settings().app.recent_transactions_limit
    latest = components.store.recent(limit)
    if not latest:
        st.info("Noch keine Einträge vorhanden")
    for transaction in latest:
        render_transaction(components, transaction, key_prefix="home")


def render_list_page(components: AppComponents, is_income: bool):
    st.title("📈 Einnahmen" if is_income else "📉 Ausgaben")

    state_key = f"filter_{'income' if is_income else 'expense'}"
    if state_key not in st.session_state:
        st.session_state[state_key] = TransactionFilter()
    current: TransactionFilter = st.session_state[state_key]

    render_add_form(components, is_income=is_income, form_key=state_key)

    search = st.text_input("Suchen...", value=current.search_text, key=f"{state_key}_search")
    current = current.with_search(search)

    chip_columns = st.columns(len(categories_for(is_income)))
    for column, category in zip(chip_columns, categories_for(is_income)):
        with column:
            marker = "✅ " if current.is_selected(category.value) else ""
            if st.button(f"{marker}{category.label}", key=f"{state_key}_{category.value}"):
                current = current.toggle_category(category.value)
                st.session_state[state_key] = current
                st.rerun()

    st.session_state[state_key] = current

    transactions = components.store.transactions
    visible = current.apply(transactions, is_income)
    if not visible:
        st.info(empty_view_message(transactions, is_income))
    for transaction in visible:
        render_transaction(components, transaction, key_prefix=state_key)


def render_add_form(components: AppComponents, is_income: bool, form_key: str):
    title = "Neue Einnahme" if is_income else "Neue Ausgabe"
    with st.expander(f"➕ {title}"):
        with st.form(f"add_{form_key}_{is_income}", clear_on_submit=True):
            raw_amount = st.text_input("Betrag (€)", placeholder="0,00")
            values = [c.value for c in categories_for(is_income)]
            category = st.selectbox(
                "Kategorie",
                values,
                index=values.index(default_category(is_income)),
            )
            picked = st.date_input("Datum", value=date.today(), format="DD.MM.YYYY")
            note = st.text_area("Notiz", placeholder="z. B. Anlass, Empfänger, Zweck…")
            submitted = st.form_submit_button("Speichern", type="primary")

        if submitted:
            outcome = run_async(components.flow.submit_new(
                raw_amount=raw_amount,
                category=category,
                is_income=is_income,
                when=to_utc_midnight(picked),
                note=note,
            ))
            if outcome.ok:
                st.success(outcome.message)
                st.rerun()
            else:
                st.error(outcome.message)


def render_transaction(components: AppComponents, transaction: Transaction, key_prefix: str):
    key = f"{key_prefix}_{transaction.id}"
    color = color_of(transaction.category, transaction.is_income)
    icon = icon_of(transaction.category, transaction.is_income)
    symbol = get_settings().app.currency_symbol

    st.markdown(
        transaction_row_html(transaction, color, icon, symbol),
        unsafe_allow_html=True,
    )

    col_edit, col_delete = st.columns(2)
    with col_edit:
        if st.button("✏️ Bearbeiten", key=f"edit_{key}"):
            st.session_state["editing_id"] = transaction.id
    with col_delete:
        if st.button("🗑️ Löschen", key=f"delete_{key}"):
            st.session_state["pending_delete_id"] = transaction.id

    if st.session_state.get("pending_delete_id") == transaction.id:
        render_delete_confirmation(components, transaction.id, key)

    if st.session_state.get("editing_id") == transaction.id:
        render_edit_form(components, transaction, key)


def render_delete_confirmation(components: AppComponents, transaction_id: int, key: str):
    st.warning("Möchten Sie diesen Eintrag wirklich löschen?")
    col_cancel, col_confirm = st.columns(2)
    with col_cancel:
        if st.button("Abbrechen", key=f"cancel_delete_{key}"):
            run_async(components.flow.delete(transaction_id, confirmed=False))
            st.session_state["pending_delete_id"] = None
            st.rerun()
    with col_confirm:
        if st.button("Löschen", key=f"confirm_delete_{key}", type="primary"):
            run_async(components.flow.delete(transaction_id, confirmed=True))
            st.session_state["pending_delete_id"] = None
            st.rerun()


def render_edit_form(components: AppComponents, transaction: Transaction, key: str):
    with st.form(f"edit_form_{key}"):
        st.markdown("**Eintrag bearbeiten**")
        raw_amount = st.text_input(
            "Betrag (€)",
            value=f"{transaction.amount}".replace(".", ","),
        )
        values = category_choices(transaction.category, transaction.is_income)
        category = st.selectbox("Kategorie", values, index=values.index(transaction.category))
        picked = st.date_input("Datum", value=transaction.date.date(), format="DD.MM.YYYY")
        note = st.text_area("Notiz", value=transaction.note)
        col_cancel, col_save = st.columns(2)
        with col_cancel:
            cancelled = st.form_submit_button("Abbrechen")
        with col_save:
            saved = st.form_submit_button("Speichern", type="primary")

    if cancelled:
        st.session_state["editing_id"] = None
        st.rerun()
    if saved:
        outcome = run_async(components.flow.submit_edit(
            transaction_id=transaction.id,
            raw_amount=raw_amount,
            category=category,
            when=to_utc_midnight(picked),
            note=note,
        ))
        if outcome.ok:
            st.session_state["editing_id"] = None
            st.rerun()
        else:
            st.error(outcome.message)


if __name__ == "__main__":
    main()
