"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Column, DateTime, Numeric, String
from sqlalchemy.sql import func

from paygate.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Trade(Base):
    __tablename__ = "trades"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    invoice_id = Column(String(64), nullable=False, index=True)
    trade_no = Column(String(64), nullable=False, unique=True)
    gateway = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, paid, failed
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    paid_at = Column(DateTime(timezone=True))


class PaymentWebhookEvent(Base):
    __tablename__ = "payment_webhook_events"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    gateway = Column(String(50), nullable=False)
    event_id = Column(String(255), nullable=False, index=True)
    event_type = Column(String(100), nullable=False)
    trade_no = Column(String(64), index=True)
    outcome = Column(String(30), nullable=False)  # completed, duplicate_or_unknown, ignored
    received_at = Column(DateTime(timezone=True), server_default=func.now())
