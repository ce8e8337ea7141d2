"""Account ledger transaction model."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text

from backend.app.db.base_class import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    payment_date = Column(DateTime(timezone=True), nullable=False, index=True)
    payment_type = Column(String(20), nullable=False, index=True)
    payment_mode = Column(String(20), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_credit_debit = Column(String(10), nullable=False)
    client_name = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc), nullable=False)
