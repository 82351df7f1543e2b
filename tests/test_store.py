"""Tests for the TransactionStore."""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from donation_tracker.models.transaction import TransactionFields
from donation_tracker.services.storage import InMemoryStorage
from donation_tracker.store import (
    TRANSACTIONS_KEY,
    TransactionStore,
    decode_transactions,
    encode_transactions,
)

from conftest import FIXED_NOW, RecordingAuditLogger, make_transaction, utc


def snapshot(store: TransactionStore) -> list[dict]:
    return [t.to_wire() for t in store.transactions]


def persisted(storage: InMemoryStorage) -> list[dict]:
    return json.loads(storage.data[TRANSACTIONS_KEY])


class TestLoad:
    """Loading never fails; bad data means an empty list."""

    def test_load_without_data_is_empty(self, run, store, audit_logger):
        assert run(store.load()) == []
        assert "transactions_loaded" in audit_logger.types()

    def test_load_sorts_newest_first(self, run, storage, store):
        older = make_transaction(1, when=utc(2024, 1, 1))
        newer = make_transaction(2, when=utc(2024, 6, 1))
        middle = make_transaction(3, when=utc(2024, 3, 1))
        storage.data[TRANSACTIONS_KEY] = encode_transactions([older, newer, middle])

        loaded = run(store.load())

        assert [t.id for t in loaded] == [2, 3, 1]

    def test_load_accepts_original_app_payload(self, run, storage, store):
        storage.data[TRANSACTIONS_KEY] = json.dumps([
            {
                "id": 1714557600000,
                "amount": 25.5,
                "category": "Bargeld",
                "isIncome": False,
                "date": "2024-05-01T09:30:00.000Z",
                "note": "Kollekte",
                "isPinned": False,
            }
        ])

        loaded = run(store.load())

        assert len(loaded) == 1
        assert loaded[0].amount == Decimal("25.5")
        assert loaded[0].note == "Kollekte"

    @pytest.mark.parametrize("payload", [
        "{not json",
        '{"id": 1}',
        '[{"id": 1, "amount": -3, "category": "x", "isIncome": true, "date": "2024-01-01"}]',
        '[{"id": 1, "category": "x"}]',
    ])
    def test_load_malformed_payload_is_empty(self, run, storage, store, audit_logger, payload):
        storage.data[TRANSACTIONS_KEY] = payload

        assert run(store.load()) == []
        assert "transactions_load_failed" in audit_logger.types()

    def test_load_duplicate_ids_is_empty(self, run, storage, store, audit_logger):
        storage.data[TRANSACTIONS_KEY] = encode_transactions([
            make_transaction(1), make_transaction(1, when=utc(2023, 1, 1)),
        ])

        assert run(store.load()) == []
        assert "transactions_load_failed" in audit_logger.types()

    def test_load_read_failure_is_empty(self, run, storage, store, audit_logger):
        storage.fail_reads = True

        assert run(store.load()) == []
        failed = [e for e in audit_logger.events if e.event_type.value == "transactions_load_failed"]
        assert failed[0].error_message == "simulated read failure"

    def test_load_failure_discards_previous_state(self, run, storage, store):
        run(store.add(10, "GoFundMe", True, utc(2024, 1, 1)))
        storage.data[TRANSACTIONS_KEY] = "garbage"

        run(store.load())

        assert len(store) == 0


class TestAdd:
    """Tests for TransactionStore.add."""

    def test_add_grows_collection_by_one(self, run, store):
        run(store.add(50, "GoFundMe", True, utc(2024, 5, 1)))
        assert len(store) == 1
        run(store.add(20, "Bargeld", False, utc(2024, 5, 2)))
        assert len(store) == 2

    def test_add_assigns_millisecond_id_and_defaults(self, run, store):
        transaction = run(store.add(50, "GoFundMe", True, utc(2024, 5, 1)))

        assert transaction.id == int(FIXED_NOW * 1000)
        assert transaction.is_pinned is False
        assert transaction.note == ""

    def test_add_ids_are_unique_within_same_millisecond(self, run, store):
        ids = [
            run(store.add(i + 1, "GoFundMe", True, utc(2024, 5, 1))).id
            for i in range(5)
        ]
        assert len(set(ids)) == 5
        assert len({t.id for t in store.transactions}) == 5

    def test_add_keeps_newest_first(self, run, store):
        run(store.add(1, "GoFundMe", True, utc(2024, 1, 1)))
        run(store.add(2, "GoFundMe", True, utc(2024, 9, 1)))
        run(store.add(3, "GoFundMe", True, utc(2024, 5, 1)))

        dates = [t.date for t in store.transactions]
        assert dates == sorted(dates, reverse=True)

    def test_add_ties_keep_newly_added_first(self, run, store):
        """New entries are prepended before the stable sort."""
        first = run(store.add(1, "GoFundMe", True, utc(2024, 1, 1)))
        second = run(store.add(2, "GoFundMe", True, utc(2024, 1, 1)))

        assert [t.id for t in store.transactions] == [second.id, first.id]

    def test_add_persists_full_sorted_list(self, run, storage, store):
        run(store.add(1, "GoFundMe", True, utc(2024, 1, 1)))
        run(store.add(2, "Bargeld", False, utc(2024, 2, 1), note="Tafel"))

        stored = persisted(storage)
        assert [r["amount"] for r in stored] == [2.0, 1.0]
        assert stored[0]["isIncome"] is False
        assert stored[0]["note"] == "Tafel"
        assert stored == snapshot(store)

    def test_add_zero_amount_is_rejected(self, run, storage, store):
        run(store.add(50, "GoFundMe", True, utc(2024, 5, 1)))
        before = snapshot(store)
        totals_before = store.totals()
        writes_before = storage.write_count

        with pytest.raises(ValidationError):
            run(store.add(0, "GoFundMe", True, utc(2024, 5, 2)))

        assert snapshot(store) == before
        assert store.totals() == totals_before
        assert storage.write_count == writes_before

    def test_add_accepts_unknown_category(self, run, store):
        transaction = run(store.add(5, "Flohmarkt", True, utc(2024, 5, 1)))
        assert transaction.category == "Flohmarkt"

    def test_add_write_failure_keeps_in_memory_change(self, run, storage, store, audit_logger):
        storage.fail_writes = True

        transaction = run(store.add(50, "GoFundMe", True, utc(2024, 5, 1)))

        assert store.get(transaction.id) == transaction
        assert TRANSACTIONS_KEY not in storage.data
        assert "transactions_save_failed" in audit_logger.types()

    def test_next_successful_write_heals_storage(self, run, storage, store):
        storage.fail_writes = True
        run(store.add(50, "GoFundMe", True, utc(2024, 5, 1)))
        storage.fail_writes = False
        run(store.add(20, "Bargeld", False, utc(2024, 5, 2)))

        assert len(persisted(storage)) == 2


class TestUpdate:
    """Tests for TransactionStore.update."""

    def _fields(self, **overrides) -> TransactionFields:
        values = dict(
            amount="75", category="Allgemeine Spenden", is_income=True,
            date=utc(2024, 12, 24), note="Weihnachten",
        )
        values.update(overrides)
        return TransactionFields(**values)

    def test_update_replaces_fields_and_keeps_id(self, run, store):
        original = run(store.add(50, "GoFundMe", True, utc(2024, 5, 1)))

        updated = run(store.update(original.id, self._fields()))

        assert updated.id == original.id
        assert store.get(original.id).amount == Decimal("75")
        assert store.get(original.id).category == "Allgemeine Spenden"
        assert store.get(original.id).note == "Weihnachten"
        assert len(store) == 1

    def test_update_resorts(self, run, store):
        a = run(store.add(1, "GoFundMe", True, utc(2024, 1, 1)))
        b = run(store.add(2, "GoFundMe", True, utc(2024, 6, 1)))
        assert [t.id for t in store.transactions] == [b.id, a.id]

        run(store.update(a.id, self._fields(date=utc(2024, 12, 1))))

        assert [t.id for t in store.transactions] == [a.id, b.id]

    def test_update_absent_id_changes_nothing(self, run, store, audit_logger):
        run(store.add(50, "GoFundMe", True, utc(2024, 5, 1)))
        run(store.add(20, "Bargeld", False, utc(2024, 5, 2)))
        before = snapshot(store)

        result = run(store.update(999, self._fields()))

        assert result is None
        assert snapshot(store) == before
        assert "transaction_not_found" in audit_logger.types()

    def test_update_persists(self, run, storage, store):
        original = run(store.add(50, "GoFundMe", True, utc(2024, 5, 1)))
        run(store.update(original.id, self._fields()))

        assert persisted(storage)[0]["amount"] == 75.0


class TestDelete:
    """Tests for TransactionStore.delete."""

    def test_delete_removes_exactly_one(self, run, store):
        a = run(store.add(1, "GoFundMe", True, utc(2024, 1, 1)))
        b = run(store.add(2, "GoFundMe", True, utc(2024, 2, 1)))

        assert run(store.delete(a.id)) is True

        assert len(store) == 1
        assert store.get(a.id) is None
        assert store.get(b.id) is not None

    def test_delete_absent_is_noop(self, run, store):
        run(store.add(1, "GoFundMe", True, utc(2024, 1, 1)))
        before = snapshot(store)

        assert run(store.delete(12345)) is False
        assert snapshot(store) == before

    def test_delete_persists(self, run, storage, store):
        a = run(store.add(1, "GoFundMe", True, utc(2024, 1, 1)))
        run(store.delete(a.id))

        assert persisted(storage) == []


class TestTotals:
    """Totals are recomputed from the list on every call."""

    def test_single_income(self, run, store):
        run(store.add(50, "GoFundMe", True, utc(2024, 5, 1), ""))

        totals = store.totals()
        assert totals.total_income == 50
        assert totals.total_expense == 0
        assert totals.balance == 50

    def test_income_and_expense(self, run, store):
        run(store.add(50, "GoFundMe", True, utc(2024, 5, 1)))
        run(store.add(20, "Bargeld", False, utc(2024, 5, 2)))

        totals = store.totals()
        assert (totals.total_income, totals.total_expense, totals.balance) == (50, 20, 30)

    def test_totals_idempotent(self, run, store):
        run(store.add("12.34", "GoFundMe", True, utc(2024, 5, 1)))
        assert store.totals() == store.totals()

    def test_balance_invariant_across_mutations(self, run, store):
        def check():
            totals = store.totals()
            assert totals.balance == totals.total_income - totals.total_expense

        check()
        a = run(store.add("10.10", "GoFundMe", True, utc(2024, 1, 1)))
        check()
        b = run(store.add("3.05", "Bargeld", False, utc(2024, 1, 2)))
        check()
        run(store.update(b.id, b.editable_fields().model_copy(update={"amount": Decimal("99")})))
        check()
        run(store.delete(a.id))
        check()
        assert store.totals().balance == Decimal("-99")


class TestRoundTrip:
    """Persist then reload through a second store."""

    def test_reload_yields_same_records(self, run, storage, store):
        run(store.add(50, "GoFundMe", True, utc(2024, 5, 1), "Spendenlauf"))
        run(store.add(20, "Bargeld", False, utc(2024, 7, 1)))
        run(store.add("7.25", "Sonstiges", True, utc(2023, 12, 31)))

        fresh = TransactionStore(storage, RecordingAuditLogger())
        reloaded = run(fresh.load())

        assert reloaded == store.transactions
        dates = [t.date for t in reloaded]
        assert dates == sorted(dates, reverse=True)

    def test_encode_decode(self):
        transactions = [make_transaction(1), make_transaction(2, category="Bargeld", is_income=False)]
        assert decode_transactions(encode_transactions(transactions)) == transactions

    def test_encoded_payload_is_the_wire_format(self):
        transactions = [make_transaction(1, amount="12.5", note="Überweisung")]

        payload = encode_transactions(transactions)

        assert json.loads(payload) == [t.to_wire() for t in transactions]
        assert "Überweisung" in payload
        assert "Infinity" not in payload


class TestQueries:
    """Tests for get and recent."""

    def test_recent_limits_to_newest(self, run, store):
        for day in range(1, 11):
            run(store.add(day, "GoFundMe", True, utc(2024, 1, day)))

        recent = store.recent(8)

        assert len(recent) == 8
        assert recent[0].date == utc(2024, 1, 10)

    def test_transactions_is_a_copy(self, run, store):
        run(store.add(1, "GoFundMe", True, utc(2024, 1, 1)))
        store.transactions.clear()
        assert len(store) == 1
