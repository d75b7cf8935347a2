"""Domain models for trades and processor events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class TradeStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class ReconcileResult(str, Enum):
    COMPLETED = "completed"
    DUPLICATE_OR_UNKNOWN = "duplicate_or_unknown"
    IGNORED = "ignored"


@dataclass(slots=True)
class Trade:
    id: str
    user_id: str
    amount: Decimal
    invoice_id: str
    trade_no: str
    gateway: str
    status: TradeStatus
    created_at: Optional[datetime]
    paid_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class CheckoutSession:
    session_id: str
    redirect_url: str


@dataclass(slots=True, frozen=True)
class WebhookEvent:
    """Authenticated processor notification.

    ``data_object`` is the ``data.object`` member of the envelope, e.g. the
    PaymentIntent for ``payment_intent.*`` events.
    """

    id: str
    type: str
    data_object: dict[str, Any] = field(default_factory=dict)

    @property
    def object_status(self) -> Optional[str]:
        return self.data_object.get("status")

    @property
    def metadata(self) -> dict[str, Any]:
        metadata = self.data_object.get("metadata")
        return metadata if isinstance(metadata, dict) else {}
