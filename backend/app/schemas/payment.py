"""Payment history schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PaymentCreate(BaseModel):
    # Presence is checked by the route so a missing field answers 400, not 422
    amount: Optional[Decimal] = None
    payment_type: Optional[str] = Field(default=None, alias="paymentType")
    payment_date: Optional[date] = Field(default=None, alias="paymentDate")
    notes: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class PaymentHistoryRead(BaseModel):
    id: int
    invoice_id: int
    amount: Decimal
    payment_type: str
    payment_date: date
    remaining_amount: Decimal
    payment_notes: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
