"""Trade ledger: creation and status transitions of trade records."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from paygate.db.models import Trade as TradeModel
from paygate.infrastructure.database.repositories.trade_repository import SqlTradeRepository

from .exceptions import TokenCollisionError, TradeNotFoundError
from .models import Trade, TradeStatus
from .repository import TradeRepository

logger = logging.getLogger(__name__)


def generate_trade_no() -> str:
    return uuid.uuid4().hex


@dataclass(slots=True)
class TradeLedger:
    repository: TradeRepository
    token_factory: Callable[[], str] = field(default=generate_trade_no)

    @classmethod
    def with_session(cls, session: AsyncSession) -> "TradeLedger":
        return cls(SqlTradeRepository(session))

    async def create(self, *, user_id: str, amount: Decimal, invoice_id: str, gateway: str) -> Trade:
        """Persist a new pending trade under a freshly generated trade number.

        A unique-constraint hit on the trade number is fatal: the token is
        never regenerated and retried here.
        """
        trade_no = self.token_factory()
        try:
            model = await self.repository.create(
                user_id=user_id,
                amount=amount,
                invoice_id=invoice_id,
                trade_no=trade_no,
                gateway=gateway,
            )
        except IntegrityError as exc:
            logger.error("Trade number collision for %s", trade_no)
            raise TokenCollisionError(trade_no) from exc
        logger.info("Created pending trade %s for user %s (invoice %s)", trade_no, user_id, invoice_id)
        return self._to_domain(model)

    async def find_by_token(self, trade_no: str) -> Trade:
        model = await self.repository.get_by_trade_no(trade_no)
        if model is None:
            raise TradeNotFoundError(trade_no)
        return self._to_domain(model)

    async def transition_to_paid(self, trade_no: str) -> bool:
        """Move a pending trade to paid; False when missing or already terminal."""
        model = await self.repository.transition_status(
            trade_no,
            from_status=TradeStatus.PENDING.value,
            to_status=TradeStatus.PAID.value,
            paid_at=datetime.now(timezone.utc),
        )
        return model is not None

    async def list_for_user(self, user_id: str, limit: int = 20, offset: int = 0) -> list[Trade]:
        rows = await self.repository.list_by_user(user_id, limit, offset)
        return [self._to_domain(row) for row in rows]

    @staticmethod
    def _to_domain(model: TradeModel) -> Trade:
        return Trade(
            id=model.id,
            user_id=model.user_id,
            amount=Decimal(model.amount),
            invoice_id=model.invoice_id,
            trade_no=model.trade_no,
            gateway=model.gateway,
            status=TradeStatus(model.status),
            created_at=model.created_at,
            paid_at=model.paid_at,
        )
