"""Payment gateway port.

Every processor integration exposes the same capabilities: a stable
name, an enabled flag, a display name, a purchase flow and a webhook
(notify) flow. Routers only ever talk to this interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from paygate.core.security import CurrentUser


@dataclass(frozen=True)
class PurchaseOutcome:
    """Result of a purchase attempt, rendered as ``{ret, msg}``."""

    ret: int
    msg: str
    redirect_url: Optional[str] = None
    trade_no: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.ret == 1


@dataclass(frozen=True)
class NotifyOutcome:
    """Result of a webhook delivery, rendered with ``status_code``."""

    status_code: int
    ret: int
    msg: str


class PaymentGateway(Protocol):
    def name(self) -> str:
        ...

    def readable_name(self) -> str:
        ...

    def is_enabled(self) -> bool:
        ...

    async def purchase(
        self,
        session: AsyncSession,
        user: CurrentUser,
        price: Any,
        invoice_id: Any,
    ) -> PurchaseOutcome:
        ...

    async def notify(
        self,
        session: AsyncSession,
        raw_body: bytes,
        headers: Mapping[str, str],
    ) -> NotifyOutcome:
        ...
