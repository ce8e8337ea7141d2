"""Invoice ledger reads and CSV export."""

from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from backend.app.core.errors import NotFoundError
from backend.app.core.time import TimeRange, resolve_time_window
from backend.app.models.invoice import Invoice
from backend.app.models.invoice_item import InvoiceItem
from backend.app.models.payment_history import PaymentHistory
from backend.app.services.export import INVOICE_COLUMNS, to_csv


def list_invoices(
    db: Session,
    *,
    now: datetime,
    search: Optional[str] = None,
    time_range: TimeRange | str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    status: Optional[str] = None,
) -> List[Invoice]:
    query = db.query(Invoice).options(selectinload(Invoice.items))
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(Invoice.bill_to.ilike(pattern), Invoice.invoice_number.ilike(pattern)))
    if status:
        query = query.filter(Invoice.status == status)

    # created_date is a calendar date, so compare against the window's dates
    window = resolve_time_window(time_range, now=now, start_date=start_date, end_date=end_date)
    if window.start is not None:
        query = query.filter(Invoice.created_date >= window.start.date())
    if window.end is not None:
        query = query.filter(Invoice.created_date < window.end.date())

    return query.order_by(Invoice.created_date.desc(), Invoice.id.desc()).all()


def get_invoice(db: Session, invoice_id: int) -> Invoice:
    invoice = (
        db.query(Invoice)
        .options(selectinload(Invoice.items), selectinload(Invoice.payment_history))
        .filter(Invoice.id == invoice_id)
        .first()
    )
    if invoice is None:
        raise NotFoundError("Invoice not found")
    return invoice


def get_invoice_items(db: Session, invoice_id: int) -> List[InvoiceItem]:
    return db.query(InvoiceItem).filter(InvoiceItem.invoice_id == invoice_id).order_by(InvoiceItem.id.asc()).all()


def get_payment_history(db: Session, invoice_id: int) -> List[PaymentHistory]:
    return (
        db.query(PaymentHistory)
        .filter(PaymentHistory.invoice_id == invoice_id)
        .order_by(PaymentHistory.payment_date.desc(), PaymentHistory.id.desc())
        .all()
    )


def export_invoices(db: Session, *, now: datetime, **filters) -> str:
    invoices = list_invoices(db, now=now, **filters)
    rows = [
        {
            "Invoice Number": invoice.invoice_number,
            "Created Date": invoice.created_date.isoformat(),
            "Due Date": invoice.due_date.isoformat() if invoice.due_date else None,
            "Bill To": invoice.bill_to,
            "Total Amount": invoice.total_amount,
            "Amount Received": invoice.amount_received,
            "Remaining Amount": invoice.remaining_amount,
            "Status": invoice.status,
            "Notes": invoice.notes,
            "Created At": invoice.created_at.isoformat(),
            "Updated At": invoice.updated_at.isoformat(),
        }
        for invoice in invoices
    ]
    return to_csv(rows, INVOICE_COLUMNS)
