"""Stripe Checkout gateway.

Purchase: validate amount -> pending trade (committed) -> FX conversion
-> checkout session -> redirect url.
Notify: verify signature over the raw body -> reconcile -> log delivery.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from paygate.core.config import Settings
from paygate.core.security import CurrentUser
from paygate.modules.payments import (
    CheckoutSessionBuilder,
    FXConverter,
    MalformedPayload,
    PaymentReconciler,
    ProcessorRejected,
    RateUnavailable,
    ReconcileResult,
    SignatureInvalid,
    TradeLedger,
    ValidationError,
    WebhookEventLog,
    WebhookVerifier,
    to_settlement_units,
)
from paygate.modules.payments.reconciler import extract_trade_no
from paygate.modules.payments.validation import sanitize_text, validate_amount

from .port import NotifyOutcome, PurchaseOutcome

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "Stripe-Signature"

MSG_INVALID_AMOUNT = "Invalid amount"
MSG_RATE_UNAVAILABLE = "Failed to fetch exchange rate"
MSG_PROCESSOR_REJECTED = "Stripe API error"
MSG_PURCHASE_STARTED = "Order created, redirecting to the payment page..."
MSG_MALFORMED = "Unexpected Value error"
MSG_BAD_SIGNATURE = "Signature Verification error"
MSG_PAYMENT_SUCCESS = "Payment success"
MSG_PAYMENT_FAILED = "Payment failed"


class StripeGateway:
    def __init__(
        self,
        settings: Settings,
        fx: FXConverter,
        checkout: CheckoutSessionBuilder,
        verifier: WebhookVerifier,
    ) -> None:
        self._settings = settings
        self._fx = fx
        self._checkout = checkout
        self._verifier = verifier

    def name(self) -> str:
        return "stripe"

    def readable_name(self) -> str:
        return "Stripe"

    def is_enabled(self) -> bool:
        return self.name() in self._settings.payment.active_gateways

    def return_url(self, invoice_id: str) -> str:
        base_url = self._settings.payment.base_url.rstrip("/")
        return f"{base_url}/user/invoice/{invoice_id}/view"

    async def purchase(
        self,
        session: AsyncSession,
        user: CurrentUser,
        price: Any,
        invoice_id: Any,
    ) -> PurchaseOutcome:
        stripe_settings = self._settings.stripe
        invoice_id = sanitize_text(invoice_id)
        try:
            amount = validate_amount(price, stripe_settings.min_recharge, stripe_settings.max_recharge)
        except ValidationError as exc:
            logger.info("Rejected purchase from user %s: %s", user.id, exc)
            return PurchaseOutcome(ret=0, msg=MSG_INVALID_AMOUNT)

        ledger = TradeLedger.with_session(session)
        trade = await ledger.create(
            user_id=user.id,
            amount=amount,
            invoice_id=invoice_id,
            gateway=self.name(),
        )
        # the pending trade must be durable before any outbound call
        await session.commit()

        try:
            converted = await self._fx.convert(
                amount,
                self._settings.payment.display_currency,
                stripe_settings.currency,
            )
        except RateUnavailable:
            return PurchaseOutcome(ret=0, msg=MSG_RATE_UNAVAILABLE, trade_no=trade.trade_no)

        amount_units = to_settlement_units(converted, stripe_settings.currency)
        return_url = self.return_url(invoice_id)
        try:
            checkout = await self._checkout.create(
                trade,
                amount_units,
                stripe_settings.currency,
                user.email,
                return_url,
                return_url,
            )
        except ProcessorRejected:
            return PurchaseOutcome(ret=0, msg=MSG_PROCESSOR_REJECTED, trade_no=trade.trade_no)

        return PurchaseOutcome(
            ret=1,
            msg=MSG_PURCHASE_STARTED,
            redirect_url=checkout.redirect_url,
            trade_no=trade.trade_no,
        )

    async def notify(
        self,
        session: AsyncSession,
        raw_body: bytes,
        headers: Mapping[str, str],
    ) -> NotifyOutcome:
        try:
            event = self._verifier.verify(
                raw_body,
                headers.get(SIGNATURE_HEADER),
                self._settings.stripe.endpoint_secret,
            )
        except MalformedPayload as exc:
            logger.warning("Malformed Stripe webhook: %s", exc)
            return NotifyOutcome(status_code=400, ret=0, msg=MSG_MALFORMED)
        except SignatureInvalid:
            return NotifyOutcome(status_code=400, ret=0, msg=MSG_BAD_SIGNATURE)

        result = await PaymentReconciler(TradeLedger.with_session(session)).reconcile(event)
        await WebhookEventLog.with_session(session).record(
            gateway=self.name(),
            event=event,
            trade_no=extract_trade_no(event),
            outcome=result,
        )
        await session.commit()

        if result is ReconcileResult.IGNORED:
            return NotifyOutcome(status_code=200, ret=0, msg=MSG_PAYMENT_FAILED)
        return NotifyOutcome(status_code=200, ret=1, msg=MSG_PAYMENT_SUCCESS)
