"""Invoice model for billing."""

from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from backend.app.db.base_class import Base


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    invoice_number = Column(String(64), nullable=False, index=True)
    created_date = Column(Date, nullable=False, index=True)
    due_date = Column(Date, nullable=True)
    bill_to = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)

    status = Column(String(20), default="Pending", nullable=False)
    total_amount = Column(Numeric(12, 2), default=0.00, nullable=False)
    amount_received = Column(Numeric(12, 2), default=0.00, nullable=False)
    remaining_amount = Column(Numeric(12, 2), default=0.00, nullable=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc), nullable=False)

    items = relationship("InvoiceItem", back_populates="invoice", cascade="all, delete-orphan", order_by="InvoiceItem.id")
    payment_history = relationship(
        "PaymentHistory",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="PaymentHistory.payment_date.desc()",
    )
