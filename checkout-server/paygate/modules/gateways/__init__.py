"""Payment gateway integrations."""

from .port import NotifyOutcome, PaymentGateway, PurchaseOutcome
from .registry import GatewayRegistry
from .stripe_adapter import StripeGateway

__all__ = [
    "GatewayRegistry",
    "NotifyOutcome",
    "PaymentGateway",
    "PurchaseOutcome",
    "StripeGateway",
]
