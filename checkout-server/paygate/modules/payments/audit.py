"""Delivery log of authenticated webhook events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from paygate.db.models import PaymentWebhookEvent as WebhookEventModel
from paygate.infrastructure.database.repositories.webhook_event_repository import SqlWebhookEventRepository

from .models import ReconcileResult, WebhookEvent
from .repository import WebhookEventRepository


@dataclass(slots=True)
class WebhookDelivery:
    id: str
    gateway: str
    event_id: str
    event_type: str
    trade_no: Optional[str]
    outcome: ReconcileResult
    received_at: Optional[datetime]


@dataclass(slots=True)
class WebhookEventLog:
    repository: WebhookEventRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "WebhookEventLog":
        return cls(SqlWebhookEventRepository(session))

    async def record(
        self,
        *,
        gateway: str,
        event: WebhookEvent,
        trade_no: str | None,
        outcome: ReconcileResult,
    ) -> WebhookDelivery:
        row = await self.repository.create(
            gateway=gateway,
            event_id=event.id,
            event_type=event.type,
            trade_no=trade_no,
            outcome=outcome.value,
        )
        return self._to_domain(row)

    async def deliveries_of(self, event_id: str) -> list[WebhookDelivery]:
        rows = await self.repository.list_by_event_id(event_id)
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(model: WebhookEventModel) -> WebhookDelivery:
        return WebhookDelivery(
            id=model.id,
            gateway=model.gateway,
            event_id=model.event_id,
            event_type=model.event_type,
            trade_no=model.trade_no,
            outcome=ReconcileResult(model.outcome),
            received_at=model.received_at,
        )
