"""Account ledger service: listing, dashboard stats and CSV export."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from backend.app.core.time import TimeRange, resolve_time_window
from backend.app.crud.crud_account import account_crud
from backend.app.models.account import Account
from backend.app.schemas.account import AccountCreate, AccountUpdate
from backend.app.services.export import ACCOUNT_COLUMNS, to_csv

logger = logging.getLogger(__name__)


def create_transaction(db: Session, payload: AccountCreate) -> Account:
    account = account_crud.create(db, obj_in=payload)
    logger.info("Created %s transaction %s for %s", account.payment_type, account.id, account.amount)
    return account


def list_transactions(
    db: Session,
    *,
    now: datetime,
    search: Optional[str] = None,
    time_range: TimeRange | str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    payment_type: Optional[str] = None,
) -> List[Account]:
    window = resolve_time_window(time_range, now=now, start_date=start_date, end_date=end_date)
    return account_crud.get_multi(db, window=window, search=search, payment_type=payment_type)


def summarize_transactions(accounts: List[Account]) -> dict:
    received = Decimal("0.00")
    expenses = Decimal("0.00")
    pending = Decimal("0.00")
    total = Decimal("0.00")
    for account in accounts:
        amount = Decimal(str(account.amount or 0))
        if account.payment_type == "Received":
            received += amount
        elif account.payment_type == "Expenses":
            expenses += amount
        elif account.payment_type == "Payments":
            pending += amount
        total += amount if account.payment_credit_debit == "credit" else -amount

    return {
        "received": received.quantize(Decimal("0.01")),
        "expenses": expenses.quantize(Decimal("0.01")),
        "pending": pending.quantize(Decimal("0.01")),
        "total": total.quantize(Decimal("0.01")),
    }


def get_transaction_stats(db: Session, *, now: datetime, time_range: TimeRange | str | None = None) -> dict:
    """Dashboard totals over the time window only; search and type filters do not apply."""
    return summarize_transactions(list_transactions(db, now=now, time_range=time_range))


def update_transaction(db: Session, account_id: int, payload: AccountUpdate) -> Account:
    account = account_crud.update(db, account_id=account_id, obj_in=payload)
    logger.info("Updated transaction %s", account_id)
    return account


def delete_transaction(db: Session, account_id: int) -> None:
    account_crud.delete(db, account_id=account_id)
    logger.info("Deleted transaction %s", account_id)


def export_transactions(db: Session, *, now: datetime, **filters) -> str:
    accounts = list_transactions(db, now=now, **filters)
    rows = [
        {
            "Payment Date": account.payment_date.isoformat(),
            "Payment Type": account.payment_type,
            "Payment Mode": account.payment_mode,
            "Amount": account.amount,
            "Client Name": account.client_name,
            "Credit/Debit": account.payment_credit_debit,
            "Notes": account.notes,
            "Created At": account.created_at.isoformat(),
            "Updated At": account.updated_at.isoformat(),
        }
        for account in accounts
    ]
    return to_csv(rows, ACCOUNT_COLUMNS)
