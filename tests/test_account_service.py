import pytest
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from backend.app.core.errors import NotFoundError
from backend.app.crud.crud_account import derive_credit_debit
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.account import Account
from backend.app.schemas.account import AccountCreate, AccountUpdate
from backend.app.services.accounts import (
    create_transaction,
    delete_transaction,
    export_transactions,
    get_transaction_stats,
    list_transactions,
    update_transaction,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def _create(db, payment_type, amount, days_ago=1, mode="Cash", client_name=None, notes=None):
    payload = AccountCreate(
        payment_date=NOW - timedelta(days=days_ago),
        payment_type=payment_type,
        payment_mode=mode,
        amount=Decimal(amount),
        client_name=client_name,
        notes=notes,
    )
    return create_transaction(db, payload)


@pytest.mark.parametrize(
    "payment_type,expected",
    [("Received", "credit"), ("Refunds", "credit"), ("Expenses", "debit"), ("Payments", "debit")],
)
def test_derive_credit_debit(payment_type, expected):
    assert derive_credit_debit(payment_type) == expected


def test_create_derives_credit_debit_and_ignores_client_value():
    db = SessionLocal()
    try:
        payload = AccountCreate.model_validate(
            {
                "payment_date": "2024-03-14T10:00:00Z",
                "payment_type": "Refunds",
                "payment_mode": "Online",
                "amount": "25.00",
                "payment_credit_debit": "debit",
            }
        )
        account = create_transaction(db, payload)
        assert account.id is not None
        assert account.payment_credit_debit == "credit"
        assert account.amount == Decimal("25.00")
        assert account.created_at is not None
    finally:
        db.close()


def test_update_rederives_side_when_type_changes():
    db = SessionLocal()
    try:
        account = _create(db, "Received", "100.00")
        updated = update_transaction(db, account.id, AccountUpdate(payment_type="Expenses", notes="fuel"))
        assert updated.payment_type == "Expenses"
        assert updated.payment_credit_debit == "debit"
        assert updated.notes == "fuel"
        assert updated.amount == Decimal("100.00")
    finally:
        db.close()


def test_update_and_delete_unknown_id_raise_not_found():
    db = SessionLocal()
    try:
        with pytest.raises(NotFoundError):
            update_transaction(db, 999, AccountUpdate(notes="x"))
        with pytest.raises(NotFoundError):
            delete_transaction(db, 999)
    finally:
        db.close()


def test_delete_removes_row():
    db = SessionLocal()
    try:
        account = _create(db, "Received", "10.00")
        delete_transaction(db, account.id)
        assert db.query(Account).count() == 0
    finally:
        db.close()


def test_list_orders_by_payment_date_desc_and_filters():
    db = SessionLocal()
    try:
        older = _create(db, "Received", "10.00", days_ago=5, client_name="Acme Corp")
        newer = _create(db, "Expenses", "20.00", days_ago=2, notes="Office rent for ACME")
        _create(db, "Payments", "30.00", days_ago=40, client_name="Globex")

        everything = list_transactions(db, now=NOW)
        assert [a.id for a in everything][:2] == [newer.id, older.id]
        assert len(everything) == 3

        searched = list_transactions(db, now=NOW, search="  acme ")
        assert {a.id for a in searched} == {older.id, newer.id}

        typed = list_transactions(db, now=NOW, payment_type="Expenses")
        assert [a.id for a in typed] == [newer.id]

        recent = list_transactions(db, now=NOW, time_range="7days")
        assert {a.id for a in recent} == {older.id, newer.id}

        assert list_transactions(db, now=NOW, search="nobody") == []
    finally:
        db.close()


def test_list_with_explicit_date_pair():
    db = SessionLocal()
    try:
        inside = _create(db, "Received", "10.00", days_ago=10)
        _create(db, "Received", "10.00", days_ago=1)
        end = (NOW - timedelta(days=10)).date()
        rows = list_transactions(db, now=NOW, start_date=date(2024, 3, 1), end_date=end)
        assert [a.id for a in rows] == [inside.id]
    finally:
        db.close()


def test_stats_on_empty_set_are_zero():
    db = SessionLocal()
    try:
        stats = get_transaction_stats(db, now=NOW, time_range="30days")
        assert stats == {
            "received": Decimal("0"),
            "expenses": Decimal("0"),
            "pending": Decimal("0"),
            "total": Decimal("0"),
        }
    finally:
        db.close()


def test_stats_sum_by_type_and_sign():
    db = SessionLocal()
    try:
        _create(db, "Received", "500.00")
        _create(db, "Refunds", "50.00")
        _create(db, "Expenses", "120.00")
        _create(db, "Payments", "80.00")
        _create(db, "Received", "1000.00", days_ago=60)

        stats = get_transaction_stats(db, now=NOW, time_range="30days")
        assert stats["received"] == Decimal("500.00")
        assert stats["expenses"] == Decimal("120.00")
        assert stats["pending"] == Decimal("80.00")
        assert stats["total"] == Decimal("350.00")
    finally:
        db.close()


def test_export_replaces_commas_in_notes():
    db = SessionLocal()
    try:
        _create(db, "Received", "15.00", notes="a,b", client_name="Doe, Jane")
        output = export_transactions(db, now=NOW, time_range="7days")
        header, row = output.split("\n")
        assert header.startswith("Payment Date,Payment Type,Payment Mode,Amount")
        cells = row.split(",")
        assert len(cells) == 9
        assert cells[1:6] == ["Received", "Cash", "15.00", "Doe; Jane", "credit"]
        assert cells[6] == "a;b"
    finally:
        db.close()
