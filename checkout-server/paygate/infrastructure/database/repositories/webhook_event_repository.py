"""SQLAlchemy implementation for the webhook delivery log"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.db.models import PaymentWebhookEvent


class SqlWebhookEventRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        gateway: str,
        event_id: str,
        event_type: str,
        trade_no: str | None,
        outcome: str,
    ) -> PaymentWebhookEvent:
        record = PaymentWebhookEvent(
            gateway=gateway,
            event_id=event_id,
            event_type=event_type,
            trade_no=trade_no,
            outcome=outcome,
            received_at=datetime.now(timezone.utc),
        )
        self.session.add(record)
        await self.session.flush()
        return record

    async def list_by_event_id(self, event_id: str) -> Sequence[PaymentWebhookEvent]:
        stmt = (
            select(PaymentWebhookEvent)
            .where(PaymentWebhookEvent.event_id == event_id)
            .order_by(PaymentWebhookEvent.received_at)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()
