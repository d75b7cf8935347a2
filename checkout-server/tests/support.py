"""Webhook signing and event builders shared by the tests."""

import hashlib
import hmac
import json
import time

WEBHOOK_SECRET = "whsec_test_secret"
RATES_URL = "https://rates.test/v6/latest"
CHECKOUT_URL = "https://checkout.stripe.com/c/pay/cs_test_123"


def sign_payload(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.".encode() + payload
    signature = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def build_event(
    trade_no: str | None,
    event_type: str = "payment_intent.succeeded",
    status: str = "succeeded",
    event_id: str = "evt_test_1",
) -> bytes:
    metadata = {"trade_no": trade_no} if trade_no is not None else {}
    event = {
        "id": event_id,
        "object": "event",
        "type": event_type,
        "data": {
            "object": {
                "id": "pi_test_1",
                "object": "payment_intent",
                "status": status,
                "metadata": metadata,
            }
        },
    }
    return json.dumps(event).encode()
