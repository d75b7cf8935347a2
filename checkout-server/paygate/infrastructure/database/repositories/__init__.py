"""SQLAlchemy-backed repository implementations."""

from .trade_repository import SqlTradeRepository
from .webhook_event_repository import SqlWebhookEventRepository

__all__ = [
    "SqlTradeRepository",
    "SqlWebhookEventRepository",
]
