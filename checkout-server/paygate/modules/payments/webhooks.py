"""Authentication of inbound processor notifications."""

from __future__ import annotations

import json
import logging

import stripe

from .exceptions import MalformedPayload, SignatureInvalid
from .models import WebhookEvent

logger = logging.getLogger(__name__)


class WebhookVerifier:
    """Checks ``Stripe-Signature`` headers against the raw request body.

    The signature is an HMAC-SHA256 over ``"{timestamp}.{body}"``; it only
    matches the exact bytes the processor sent, so callers must hand over
    the unparsed body.
    """

    def __init__(self, tolerance: int = stripe.Webhook.DEFAULT_TOLERANCE) -> None:
        self._tolerance = tolerance

    def verify(self, raw_body: bytes, signature_header: str | None, secret: str) -> WebhookEvent:
        if not isinstance(raw_body, (bytes, bytearray)):
            raise TypeError("webhook verification needs the raw request body bytes, not a parsed or re-encoded value")
        try:
            payload = bytes(raw_body).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedPayload("webhook body is not valid UTF-8") from exc

        try:
            stripe.WebhookSignature.verify_header(payload, signature_header or "", secret, self._tolerance)
        except stripe.SignatureVerificationError as exc:
            logger.warning("Webhook signature rejected: %s", exc)
            raise SignatureInvalid(str(exc)) from exc

        return self.parse_event(payload)

    @staticmethod
    def parse_event(payload: str) -> WebhookEvent:
        try:
            data = json.loads(payload)
        except ValueError as exc:
            raise MalformedPayload("webhook body is not JSON") from exc
        if not isinstance(data, dict):
            raise MalformedPayload("webhook body is not an event object")

        event_id = data.get("id")
        event_type = data.get("type")
        body = data.get("data")
        if not isinstance(event_id, str) or not isinstance(event_type, str) or not isinstance(body, dict):
            raise MalformedPayload("webhook body is missing id, type or data")
        data_object = body.get("object")
        if not isinstance(data_object, dict):
            raise MalformedPayload("webhook event has no data.object")
        return WebhookEvent(id=event_id, type=event_type, data_object=data_object)
