import pytest
from decimal import Decimal
from datetime import date

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.invoice import Invoice
from backend.app.models.invoice_item import InvoiceItem
from backend.app.models.payment_history import PaymentHistory


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def _create_invoice(db):
    invoice = Invoice(
        invoice_number="INV-1",
        created_date=date(2030, 1, 1),
        due_date=date(2030, 1, 31),
        bill_to="Acme Corp",
        total_amount=Decimal("80.00"),
        amount_received=Decimal("0.00"),
        remaining_amount=Decimal("80.00"),
    )
    db.add(invoice)
    db.commit()
    db.refresh(invoice)

    item = InvoiceItem(invoice_id=invoice.id, service_name="Support", description="January", amount=Decimal("80.00"))
    db.add(item)
    db.commit()
    db.refresh(item)
    return invoice


def test_invoice_defaults_and_relations():
    db = SessionLocal()
    try:
        invoice = _create_invoice(db)
        assert invoice.status == "Pending"
        assert invoice.created_at is not None
        assert invoice.updated_at is not None
        assert invoice.items[0].invoice.id == invoice.id
    finally:
        db.close()


def test_payment_history_persists_and_relations_work():
    db = SessionLocal()
    try:
        invoice = _create_invoice(db)
        payment = PaymentHistory(
            invoice_id=invoice.id,
            amount=Decimal("30.00"),
            payment_type="Cash",
            payment_date=date(2030, 1, 5),
            remaining_amount=Decimal("50.00"),
        )
        db.add(payment)
        db.commit()
        db.refresh(payment)

        assert payment.id is not None
        assert payment.created_at is not None
        assert payment.invoice.id == invoice.id
        assert payment.invoice.payment_history[0].id == payment.id
    finally:
        db.close()


def test_payment_history_orders_newest_first():
    db = SessionLocal()
    try:
        invoice = _create_invoice(db)
        for day, remaining in ((3, "70.00"), (9, "40.00")):
            db.add(
                PaymentHistory(
                    invoice_id=invoice.id,
                    amount=Decimal("10.00"),
                    payment_type="Online",
                    payment_date=date(2030, 1, day),
                    remaining_amount=Decimal(remaining),
                )
            )
        db.commit()
        db.refresh(invoice)

        assert [p.payment_date for p in invoice.payment_history] == [date(2030, 1, 9), date(2030, 1, 3)]
    finally:
        db.close()


def test_amount_precision():
    db = SessionLocal()
    try:
        invoice = _create_invoice(db)
        payment = PaymentHistory(
            invoice_id=invoice.id,
            amount=Decimal("123.45"),
            payment_type="Cheque",
            payment_date=date(2030, 1, 2),
            remaining_amount=Decimal("0.00"),
        )
        db.add(payment)
        db.commit()
        db.refresh(payment)

        assert payment.amount == Decimal("123.45")
    finally:
        db.close()
