"""Payment intake and reconciliation exports"""

from .exceptions import (
    GatewayNotFoundError,
    MalformedPayload,
    PaymentError,
    ProcessorRejected,
    RateUnavailable,
    SignatureInvalid,
    TokenCollisionError,
    TradeNotFoundError,
    ValidationError,
)
from .models import CheckoutSession, ReconcileResult, Trade, TradeStatus, WebhookEvent
from .ledger import TradeLedger
from .fx import FXConverter, to_settlement_units
from .checkout import CheckoutSessionBuilder
from .webhooks import WebhookVerifier
from .reconciler import PaymentReconciler
from .audit import WebhookEventLog

__all__ = [
    "CheckoutSession",
    "CheckoutSessionBuilder",
    "FXConverter",
    "GatewayNotFoundError",
    "MalformedPayload",
    "PaymentError",
    "PaymentReconciler",
    "ProcessorRejected",
    "RateUnavailable",
    "ReconcileResult",
    "SignatureInvalid",
    "TokenCollisionError",
    "Trade",
    "TradeLedger",
    "TradeNotFoundError",
    "TradeStatus",
    "ValidationError",
    "WebhookEvent",
    "WebhookEventLog",
    "WebhookVerifier",
    "to_settlement_units",
]
