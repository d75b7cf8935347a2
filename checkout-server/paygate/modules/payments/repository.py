"""Repository interfaces for trades and webhook deliveries."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol, Sequence

from paygate.db.models import PaymentWebhookEvent as WebhookEventModel, Trade as TradeModel


class TradeRepository(Protocol):
    async def create(
        self,
        *,
        user_id: str,
        amount: Decimal,
        invoice_id: str,
        trade_no: str,
        gateway: str,
    ) -> TradeModel:
        ...

    async def get_by_trade_no(self, trade_no: str) -> TradeModel | None:
        ...

    async def transition_status(
        self,
        trade_no: str,
        *,
        from_status: str,
        to_status: str,
        **values: Any,
    ) -> TradeModel | None:
        ...

    async def list_by_user(self, user_id: str, limit: int, offset: int) -> Sequence[TradeModel]:
        ...


class WebhookEventRepository(Protocol):
    async def create(
        self,
        *,
        gateway: str,
        event_id: str,
        event_type: str,
        trade_no: str | None,
        outcome: str,
    ) -> WebhookEventModel:
        ...

    async def list_by_event_id(self, event_id: str) -> Sequence[WebhookEventModel]:
        ...
