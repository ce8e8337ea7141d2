"""CRUD operations for account ledger transactions."""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from backend.app.core.errors import NotFoundError
from backend.app.core.time import TimeWindow
from backend.app.db.session import unit_of_work
from backend.app.models.account import Account
from backend.app.schemas.account import AccountCreate, AccountUpdate

CREDIT_PAYMENT_TYPES = frozenset({"Received", "Refunds"})
NULLABLE_FIELDS = frozenset({"client_name", "notes"})


def derive_credit_debit(payment_type: str) -> str:
    """Return the ledger side of a payment type; the only place it is decided."""
    return "credit" if payment_type in CREDIT_PAYMENT_TYPES else "debit"


class CRUDAccount:
    def create(self, db: Session, *, obj_in: AccountCreate) -> Account:
        data = obj_in.model_dump()
        obj = Account(payment_credit_debit=derive_credit_debit(data["payment_type"]), **data)
        with unit_of_work(db):
            db.add(obj)
        db.refresh(obj)
        return obj

    def get(self, db: Session, *, account_id: int) -> Optional[Account]:
        return db.query(Account).filter(Account.id == account_id).first()

    def get_multi(
        self,
        db: Session,
        *,
        window: TimeWindow,
        search: Optional[str] = None,
        payment_type: Optional[str] = None,
    ) -> List[Account]:
        query = db.query(Account)
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(Account.client_name.ilike(pattern), Account.notes.ilike(pattern)))
        if payment_type:
            query = query.filter(Account.payment_type == payment_type)
        if window.start is not None:
            query = query.filter(Account.payment_date >= window.start)
        if window.end is not None:
            query = query.filter(Account.payment_date < window.end)
        return query.order_by(Account.payment_date.desc(), Account.id.desc()).all()

    def update(self, db: Session, *, account_id: int, obj_in: AccountUpdate) -> Account:
        db_obj = self.get(db, account_id=account_id)
        if db_obj is None:
            raise NotFoundError(f"Transaction {account_id} not found")
        update_data = {
            field: value
            for field, value in obj_in.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_FIELDS
        }
        with unit_of_work(db):
            for field, value in update_data.items():
                setattr(db_obj, field, value)
            db_obj.payment_credit_debit = derive_credit_debit(db_obj.payment_type)
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, *, account_id: int) -> Account:
        db_obj = self.get(db, account_id=account_id)
        if db_obj is None:
            raise NotFoundError(f"Transaction {account_id} not found")
        with unit_of_work(db):
            db.delete(db_obj)
        return db_obj


account_crud = CRUDAccount()
