"""Applies verified payment events to trades."""

from __future__ import annotations

import logging

from .ledger import TradeLedger
from .models import ReconcileResult, WebhookEvent

logger = logging.getLogger(__name__)

PAYMENT_SUCCEEDED_EVENT = "payment_intent.succeeded"
SUCCEEDED_STATUS = "succeeded"
TRADE_NO_METADATA_KEY = "trade_no"


def extract_trade_no(event: WebhookEvent) -> str | None:
    trade_no = event.metadata.get(TRADE_NO_METADATA_KEY)
    return trade_no if isinstance(trade_no, str) and trade_no else None


class PaymentReconciler:
    def __init__(self, ledger: TradeLedger) -> None:
        self._ledger = ledger

    async def reconcile(self, event: WebhookEvent) -> ReconcileResult:
        """Mark the event's trade as paid at most once.

        Redeliveries and events for unknown trades come back as
        ``DUPLICATE_OR_UNKNOWN``; callers acknowledge those as success so
        the processor stops retrying.
        """
        if event.type != PAYMENT_SUCCEEDED_EVENT or event.object_status != SUCCEEDED_STATUS:
            logger.info("Ignoring webhook event %s (%s, status=%s)", event.id, event.type, event.object_status)
            return ReconcileResult.IGNORED

        trade_no = extract_trade_no(event)
        if trade_no is None:
            logger.warning("Payment event %s carries no trade number", event.id)
            return ReconcileResult.DUPLICATE_OR_UNKNOWN

        if await self._ledger.transition_to_paid(trade_no):
            logger.info("Trade %s paid (event %s)", trade_no, event.id)
            return ReconcileResult.COMPLETED

        logger.info("Trade %s already settled or unknown (event %s)", trade_no, event.id)
        return ReconcileResult.DUPLICATE_OR_UNKNOWN
