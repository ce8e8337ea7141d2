"""Account ledger schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.app.core.time import as_utc

PaymentType = Literal["Received", "Expenses", "Payments", "Refunds"]
PaymentMode = Literal["Online", "Cash", "Cheque"]
CreditDebit = Literal["credit", "debit"]


class AccountBase(BaseModel):
    payment_date: datetime
    payment_type: PaymentType
    payment_mode: PaymentMode
    amount: Decimal = Field(gt=0)
    client_name: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("payment_date")
    @classmethod
    def _payment_date_in_utc(cls, value):
        return as_utc(value)


class AccountCreate(AccountBase):
    pass


class AccountUpdate(BaseModel):
    payment_date: Optional[datetime] = None
    payment_type: Optional[PaymentType] = None
    payment_mode: Optional[PaymentMode] = None
    amount: Optional[Decimal] = Field(default=None, gt=0)
    client_name: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("payment_date")
    @classmethod
    def _payment_date_in_utc(cls, value):
        return as_utc(value)


class AccountRead(AccountBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    payment_credit_debit: CreditDebit
    created_at: datetime
    updated_at: datetime

    # SQLite hands timestamps back naive; they were written as UTC
    @field_validator("created_at", "updated_at")
    @classmethod
    def _timestamps_in_utc(cls, value):
        return as_utc(value)


class AccountStats(BaseModel):
    received: Decimal = Decimal("0.00")
    expenses: Decimal = Decimal("0.00")
    pending: Decimal = Decimal("0.00")
    total: Decimal = Decimal("0.00")


class AccountList(BaseModel):
    transactions: List[AccountRead]
    stats: AccountStats


class AccountEnvelope(BaseModel):
    message: str
    data: AccountRead
