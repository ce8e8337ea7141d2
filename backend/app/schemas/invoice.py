"""Invoice schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from backend.app.schemas.invoice_item import InvoiceItemCreate, InvoiceItemRead
from backend.app.schemas.payment import PaymentHistoryRead

InvoiceStatus = Literal["Pending", "Partially Paid", "Paid"]


class InvoiceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    invoice_number: str = Field(alias="invoiceNumber")
    created_date: date
    due_date: Optional[date] = None
    bill_to: str = Field(alias="billTo")
    notes: Optional[str] = None
    # Defaults to the sum of the item amounts
    total_amount: Optional[Decimal] = Field(default=None, ge=0)
    amount_received: Decimal = Field(default=Decimal("0.00"), ge=0)
    items: List[InvoiceItemCreate] = []


class InvoiceUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    created_date: Optional[date] = None
    due_date: Optional[date] = None
    bill_to: Optional[str] = Field(default=None, alias="billTo")
    notes: Optional[str] = None
    total_amount: Optional[Decimal] = Field(default=None, ge=0)
    items: Optional[List[InvoiceItemCreate]] = None


class InvoiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    created_date: date
    due_date: Optional[date]
    bill_to: str
    notes: Optional[str]

    status: InvoiceStatus
    total_amount: Decimal
    amount_received: Decimal
    remaining_amount: Decimal

    created_at: datetime
    updated_at: datetime

    items: List[InvoiceItemRead] = []


class InvoiceDetail(InvoiceRead):
    payment_history: List[PaymentHistoryRead] = []


class InvoiceEnvelope(BaseModel):
    message: str
    data: InvoiceRead


class PaymentApplied(BaseModel):
    payment: PaymentHistoryRead
    invoice: InvoiceRead


class PaymentEnvelope(BaseModel):
    message: str
    data: PaymentApplied
