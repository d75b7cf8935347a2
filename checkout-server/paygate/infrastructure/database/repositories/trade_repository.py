"""SQLAlchemy implementation for the trade repository"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

from sqlalchemy import desc, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.db.models import Trade


class SqlTradeRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        user_id: str,
        amount: Decimal,
        invoice_id: str,
        trade_no: str,
        gateway: str,
    ) -> Trade:
        trade = Trade(
            user_id=user_id,
            amount=amount,
            invoice_id=invoice_id,
            trade_no=trade_no,
            gateway=gateway,
            status="pending",
        )
        self.session.add(trade)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise
        await self.session.refresh(trade)
        return trade

    async def get_by_trade_no(self, trade_no: str) -> Trade | None:
        stmt = select(Trade).where(Trade.trade_no == trade_no)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def transition_status(
        self,
        trade_no: str,
        *,
        from_status: str,
        to_status: str,
        **values: Any,
    ) -> Trade | None:
        stmt = (
            update(Trade)
            .where(Trade.trade_no == trade_no, Trade.status == from_status)
            .values(status=to_status, **values)
            .execution_options(synchronize_session="fetch")
            .returning(Trade)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_user(self, user_id: str, limit: int, offset: int) -> Sequence[Trade]:
        stmt = (
            select(Trade)
            .where(Trade.user_id == user_id)
            .order_by(desc(Trade.created_at))
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()
