"""Remote checkout session creation."""

from __future__ import annotations

import asyncio
import logging

import stripe

from .exceptions import ProcessorRejected
from .models import CheckoutSession, Trade

logger = logging.getLogger(__name__)


class CheckoutSessionBuilder:
    """Creates hosted checkout sessions through an explicit :class:`stripe.StripeClient`.

    The trade number travels as PaymentIntent metadata so that
    ``payment_intent.*`` webhooks carry it back verbatim.
    """

    def __init__(self, client: stripe.StripeClient, timeout: float = 15.0) -> None:
        self._client = client
        self._timeout = timeout

    async def create(
        self,
        trade: Trade,
        amount_units: int,
        currency: str,
        buyer_email: str | None,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        params = self.build_params(trade, amount_units, currency, buyer_email, success_url, cancel_url)
        try:
            session = await asyncio.wait_for(
                self._client.v1.checkout.sessions.create_async(params=params),
                timeout=self._timeout,
            )
        except stripe.StripeError as exc:
            logger.warning("Checkout session for trade %s rejected: %s", trade.trade_no, exc)
            raise ProcessorRejected(str(exc)) from exc
        except asyncio.TimeoutError as exc:
            logger.warning("Checkout session for trade %s timed out after %ss", trade.trade_no, self._timeout)
            raise ProcessorRejected("checkout session request timed out") from exc

        if not getattr(session, "url", None):
            raise ProcessorRejected("checkout session has no redirect url")
        logger.info("Checkout session %s created for trade %s", session.id, trade.trade_no)
        return CheckoutSession(session_id=session.id, redirect_url=session.url)

    @staticmethod
    def build_params(
        trade: Trade,
        amount_units: int,
        currency: str,
        buyer_email: str | None,
        success_url: str,
        cancel_url: str,
    ) -> dict:
        params: dict = {
            "mode": "payment",
            "line_items": [
                {
                    "price_data": {
                        "currency": currency.lower(),
                        "product_data": {"name": f"Invoice #{trade.invoice_id}"},
                        "unit_amount": amount_units,
                    },
                    "quantity": 1,
                }
            ],
            "payment_intent_data": {"metadata": {"trade_no": trade.trade_no}},
            "metadata": {"trade_no": trade.trade_no},
            "success_url": success_url,
            "cancel_url": cancel_url,
        }
        if buyer_email:
            params["customer_email"] = buyer_email
        return params
