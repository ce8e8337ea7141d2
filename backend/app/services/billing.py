"""Invoice ledger writes: creation, edits and payment application."""

import logging
from decimal import Decimal
from typing import Iterable

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from backend.app.core.errors import NotFoundError, OverpaymentError, ValidationError
from backend.app.db.session import unit_of_work
from backend.app.models.invoice import Invoice
from backend.app.models.invoice_item import InvoiceItem
from backend.app.models.payment_history import PaymentHistory
from backend.app.schemas.invoice import InvoiceCreate, InvoiceUpdate
from backend.app.schemas.invoice_item import InvoiceItemCreate
from backend.app.schemas.payment import PaymentCreate

logger = logging.getLogger(__name__)

STATUS_PENDING = "Pending"
STATUS_PARTIALLY_PAID = "Partially Paid"
STATUS_PAID = "Paid"

INITIAL_PAYMENT_TYPE = "Online"

NULLABLE_HEADER_FIELDS = frozenset({"due_date", "notes"})

ZERO = Decimal("0.00")


def _money(value) -> Decimal:
    return Decimal(str(value or 0)).quantize(Decimal("0.01"))


def determine_invoice_status(amount_received, total_amount) -> str:
    """Derive an invoice status from its running totals.

    Nothing received is Pending (including zero-total invoices), a fully
    covered total is Paid, anything in between is Partially Paid.
    """
    received = _money(amount_received)
    total = _money(total_amount)
    if received <= ZERO:
        return STATUS_PENDING
    if received >= total:
        return STATUS_PAID
    return STATUS_PARTIALLY_PAID


def recalculate_invoice_totals(invoice: Invoice) -> None:
    total = _money(invoice.total_amount)
    received = _money(invoice.amount_received)
    if received > total:
        raise OverpaymentError("Payment amount exceeds invoice total")
    invoice.total_amount = total
    invoice.amount_received = received
    invoice.remaining_amount = total - received
    invoice.status = determine_invoice_status(received, total)


def _build_items(items: Iterable[InvoiceItemCreate]) -> list[InvoiceItem]:
    return [
        InvoiceItem(service_name=item.service_name, description=item.description, amount=_money(item.amount))
        for item in items
    ]


def create_invoice(db: Session, payload: InvoiceCreate) -> Invoice:
    total_amount = payload.total_amount
    if total_amount is None:
        total_amount = sum((item.amount for item in payload.items), ZERO)

    invoice = Invoice(
        invoice_number=payload.invoice_number,
        created_date=payload.created_date,
        due_date=payload.due_date,
        bill_to=payload.bill_to,
        notes=payload.notes or None,
        total_amount=total_amount,
        amount_received=payload.amount_received,
    )
    recalculate_invoice_totals(invoice)

    with unit_of_work(db):
        db.add(invoice)
        db.flush()  # obtain invoice id for items and payment history
        for item in _build_items(payload.items):
            item.invoice_id = invoice.id
            db.add(item)
        if invoice.amount_received > ZERO:
            db.add(
                PaymentHistory(
                    invoice_id=invoice.id,
                    amount=invoice.amount_received,
                    payment_type=INITIAL_PAYMENT_TYPE,
                    payment_date=invoice.created_date,
                    remaining_amount=invoice.remaining_amount,
                    payment_notes=invoice.notes,
                )
            )
    db.refresh(invoice)
    logger.info("Created invoice %s (%s) total=%s status=%s", invoice.id, invoice.invoice_number, invoice.total_amount, invoice.status)
    return invoice


def update_invoice(db: Session, invoice_id: int, payload: InvoiceUpdate) -> Invoice:
    invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
    if invoice is None:
        raise NotFoundError(f"Invoice {invoice_id} not found")

    update_data = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True, exclude={"items"}).items()
        if value is not None or field in NULLABLE_HEADER_FIELDS
    }
    with unit_of_work(db):
        for field, value in update_data.items():
            setattr(invoice, field, value)
        if "total_amount" in update_data:
            recalculate_invoice_totals(invoice)
        if payload.items:
            # Items are replaced wholesale; the old rows are deleted as orphans
            invoice.items = _build_items(payload.items)
    db.refresh(invoice)
    logger.info("Updated invoice %s", invoice_id)
    return invoice


def apply_payment_to_invoice(db: Session, invoice_id: int, payload: PaymentCreate) -> dict:
    """Append a payment to an invoice and roll its totals forward.

    The overpayment check and the increment are one conditional UPDATE, so
    concurrent payments on the same invoice are decided by the database: the
    one that would exceed the total matches no row and is rejected.
    Returns ``{"payment": PaymentHistory, "invoice": Invoice}``.
    """
    payment_amount = _money(payload.amount)
    if payment_amount <= ZERO:
        raise ValidationError("Payment amount must be greater than zero")

    with unit_of_work(db):
        result = db.execute(
            update(Invoice)
            .where(Invoice.id == invoice_id, Invoice.remaining_amount >= payment_amount)
            .values(
                # Rounded in SQL so float-backed stores keep exact cent values for later comparisons
                amount_received=func.round(Invoice.amount_received + payment_amount, 2),
                remaining_amount=func.round(Invoice.remaining_amount - payment_amount, 2),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            if db.query(Invoice.id).filter(Invoice.id == invoice_id).first() is None:
                raise NotFoundError("Invoice not found")
            logger.warning("Rejected payment of %s on invoice %s: would exceed total", payment_amount, invoice_id)
            raise OverpaymentError("Payment amount exceeds invoice total")

        # The UPDATE holds the write lock, so this read sees the committed balance plus this payment
        invoice = db.query(Invoice).filter(Invoice.id == invoice_id).populate_existing().one()
        recalculate_invoice_totals(invoice)

        payment = PaymentHistory(
            invoice_id=invoice.id,
            amount=payment_amount,
            payment_type=payload.payment_type,
            payment_date=payload.payment_date,
            remaining_amount=invoice.remaining_amount,
            payment_notes=payload.notes or None,
        )
        db.add(payment)

    db.refresh(payment)
    db.refresh(invoice)
    logger.info("Applied payment %s of %s to invoice %s, status=%s", payment.id, payment_amount, invoice_id, invoice.status)
    return {"payment": payment, "invoice": invoice}
