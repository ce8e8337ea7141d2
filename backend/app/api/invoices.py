"""Invoice ledger routes."""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from backend.app.api.errors import ledger_error_response
from backend.app.core.errors import LedgerError
from backend.app.core.time import TimeRange, utc_now
from backend.app.db.session import get_db
from backend.app.schemas.invoice import (
    InvoiceCreate,
    InvoiceDetail,
    InvoiceEnvelope,
    InvoiceRead,
    InvoiceStatus,
    InvoiceUpdate,
    PaymentEnvelope,
)
from backend.app.schemas.invoice_item import InvoiceItemRead
from backend.app.schemas.payment import PaymentCreate, PaymentHistoryRead
from backend.app.services.billing import apply_payment_to_invoice, create_invoice, update_invoice
from backend.app.services.invoices import (
    export_invoices,
    get_invoice,
    get_invoice_items,
    get_payment_history,
    list_invoices,
)

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.post("", response_model=InvoiceEnvelope, status_code=status.HTTP_201_CREATED)
async def create_invoice_route(payload: InvoiceCreate, db: Session = Depends(get_db)):
    try:
        invoice = create_invoice(db, payload)
    except LedgerError as exc:
        return ledger_error_response("Error creating invoice", exc)
    return {"message": "Invoice created successfully", "data": invoice}


@router.get("", response_model=List[InvoiceRead])
async def list_invoices_route(
    search: str | None = None,
    time_range: TimeRange | None = Query(default=None, alias="timeRange"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    invoice_status: InvoiceStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
):
    try:
        return list_invoices(
            db,
            now=utc_now(),
            search=search,
            time_range=time_range,
            start_date=start_date,
            end_date=end_date,
            status=invoice_status,
        )
    except LedgerError as exc:
        return ledger_error_response("Error fetching invoices", exc)


@router.get("/export", response_class=Response)
async def export_invoices_route(
    search: str | None = None,
    time_range: TimeRange | None = Query(default=None, alias="timeRange"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    invoice_status: InvoiceStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
):
    now = utc_now()
    try:
        csv_data = export_invoices(
            db,
            now=now,
            search=search,
            time_range=time_range,
            start_date=start_date,
            end_date=end_date,
            status=invoice_status,
        )
    except LedgerError as exc:
        return ledger_error_response("Error exporting invoices", exc)
    headers = {"Content-Disposition": f"attachment; filename=invoices_{now.date().isoformat()}.csv"}
    return Response(content=csv_data, media_type="text/csv", headers=headers)


@router.get("/{invoice_id}", response_model=InvoiceDetail)
async def get_invoice_route(invoice_id: int, db: Session = Depends(get_db)):
    try:
        return get_invoice(db, invoice_id)
    except LedgerError as exc:
        return ledger_error_response("Error fetching invoice", exc)


@router.put("/{invoice_id}", response_model=InvoiceEnvelope)
async def update_invoice_route(invoice_id: int, payload: InvoiceUpdate, db: Session = Depends(get_db)):
    try:
        invoice = update_invoice(db, invoice_id, payload)
    except LedgerError as exc:
        return ledger_error_response("Error updating invoice", exc)
    return {"message": "Invoice updated successfully", "data": invoice}


@router.post("/{invoice_id}/payments", response_model=PaymentEnvelope, status_code=status.HTTP_201_CREATED)
async def create_payment_for_invoice(invoice_id: int, payload: PaymentCreate, db: Session = Depends(get_db)):
    if not payload.amount or not payload.payment_type or not payload.payment_date:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Amount, payment type, and payment date are required"},
        )
    try:
        result = apply_payment_to_invoice(db, invoice_id, payload)
    except LedgerError as exc:
        return ledger_error_response("Error adding payment", exc)
    return {"message": "Payment added successfully", "data": result}


@router.get("/{invoice_id}/items", response_model=List[InvoiceItemRead])
async def list_invoice_items(invoice_id: int, db: Session = Depends(get_db)):
    try:
        return get_invoice_items(db, invoice_id)
    except LedgerError as exc:
        return ledger_error_response("Error fetching invoice items", exc)


@router.get("/{invoice_id}/payments", response_model=List[PaymentHistoryRead])
async def list_invoice_payments(invoice_id: int, db: Session = Depends(get_db)):
    try:
        return get_payment_history(db, invoice_id)
    except LedgerError as exc:
        return ledger_error_response("Error fetching payment history", exc)
