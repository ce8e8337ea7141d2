"""Account ledger routes."""

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from backend.app.api.errors import ledger_error_response
from backend.app.core.errors import LedgerError
from backend.app.core.time import TimeRange, utc_now
from backend.app.db.session import get_db
from backend.app.schemas.account import AccountCreate, AccountEnvelope, AccountList, AccountStats, AccountUpdate, PaymentType
from backend.app.services.accounts import (
    create_transaction,
    delete_transaction,
    export_transactions,
    get_transaction_stats,
    list_transactions,
    update_transaction,
)

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=AccountEnvelope, status_code=status.HTTP_201_CREATED)
async def create_account(payload: AccountCreate, db: Session = Depends(get_db)):
    try:
        account = create_transaction(db, payload)
    except LedgerError as exc:
        return ledger_error_response("Error creating transaction", exc)
    return {"message": "Transaction created successfully", "data": account}


@router.get("", response_model=AccountList)
async def list_accounts(
    search: str | None = None,
    time_range: TimeRange | None = Query(default=None, alias="timeRange"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    payment_type: PaymentType | None = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
):
    now = utc_now()
    try:
        transactions = list_transactions(
            db,
            now=now,
            search=search,
            time_range=time_range,
            start_date=start_date,
            end_date=end_date,
            payment_type=payment_type,
        )
        stats = get_transaction_stats(db, now=now, time_range=time_range)
    except LedgerError as exc:
        return ledger_error_response("Error fetching transactions", exc)
    return {"transactions": transactions, "stats": stats}


@router.get("/stats", response_model=AccountStats)
async def account_stats(
    time_range: TimeRange | None = Query(default=None, alias="timeRange"),
    db: Session = Depends(get_db),
):
    try:
        return get_transaction_stats(db, now=utc_now(), time_range=time_range)
    except LedgerError as exc:
        return ledger_error_response("Error fetching transaction stats", exc)


@router.get("/export", response_class=Response)
async def export_accounts(
    search: str | None = None,
    time_range: TimeRange | None = Query(default=None, alias="timeRange"),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    payment_type: PaymentType | None = Query(default=None, alias="type"),
    db: Session = Depends(get_db),
):
    now = utc_now()
    try:
        csv_data = export_transactions(
            db,
            now=now,
            search=search,
            time_range=time_range,
            start_date=start_date,
            end_date=end_date,
            payment_type=payment_type,
        )
    except LedgerError as exc:
        return ledger_error_response("Error exporting transactions", exc)
    range_label = time_range.value if time_range else "all"
    headers = {
        "Content-Disposition": f"attachment; filename=accounts_{range_label}_{now.date().isoformat()}.csv"
    }
    return Response(content=csv_data, media_type="text/csv", headers=headers)


@router.put("/{account_id}", response_model=AccountEnvelope)
async def update_account(account_id: int, payload: AccountUpdate, db: Session = Depends(get_db)):
    try:
        account = update_transaction(db, account_id, payload)
    except LedgerError as exc:
        return ledger_error_response("Error updating transaction", exc)
    return {"message": "Transaction updated successfully", "data": account}


@router.delete("/{account_id}")
async def delete_account(account_id: int, db: Session = Depends(get_db)):
    try:
        delete_transaction(db, account_id)
    except LedgerError as exc:
        return ledger_error_response("Error deleting transaction", exc)
    return {"message": "Transaction deleted successfully"}
