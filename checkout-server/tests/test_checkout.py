import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import pytest
import stripe

from paygate.modules.payments import CheckoutSessionBuilder, ProcessorRejected, Trade, TradeStatus

from tests.support import CHECKOUT_URL

RETURN_URL = "https://panel.example.com/user/invoice/inv-7/view"


@pytest.fixture
def trade() -> Trade:
    return Trade(
        id="trade-id",
        user_id="user-1",
        amount=Decimal("50"),
        invoice_id="inv-7",
        trade_no="3b0f4d7c9e2a4f8e8f7a6b5c4d3e2f1a",
        gateway="stripe",
        status=TradeStatus.PENDING,
        created_at=datetime.now(timezone.utc),
    )


async def test_creates_session_with_trade_metadata(stripe_client, trade):
    builder = CheckoutSessionBuilder(stripe_client)

    session = await builder.create(trade, 700, "USD", "buyer@example.com", RETURN_URL, RETURN_URL)

    assert session.session_id == "cs_test_123"
    assert session.redirect_url == CHECKOUT_URL
    params = stripe_client.last_params
    assert params["mode"] == "payment"
    assert params["customer_email"] == "buyer@example.com"
    assert params["payment_intent_data"]["metadata"] == {"trade_no": trade.trade_no}
    line_item = params["line_items"][0]
    assert line_item["quantity"] == 1
    assert line_item["price_data"]["unit_amount"] == 700
    assert line_item["price_data"]["currency"] == "usd"
    assert line_item["price_data"]["product_data"]["name"] == "Invoice #inv-7"
    assert params["success_url"] == RETURN_URL
    assert params["cancel_url"] == RETURN_URL


async def test_email_omitted_when_unknown(stripe_client, trade):
    await CheckoutSessionBuilder(stripe_client).create(trade, 700, "USD", None, RETURN_URL, RETURN_URL)

    assert "customer_email" not in stripe_client.last_params


@pytest.mark.parametrize(
    "error",
    [
        stripe.InvalidRequestError("Invalid currency: xyz", param="currency"),
        stripe.AuthenticationError("Invalid API Key provided"),
        stripe.APIConnectionError("Network error"),
    ],
)
async def test_processor_errors_are_rejections(stripe_client, trade, error):
    stripe_client.create_async.side_effect = error

    with pytest.raises(ProcessorRejected):
        await CheckoutSessionBuilder(stripe_client).create(trade, 700, "USD", None, RETURN_URL, RETURN_URL)


async def test_timeout_is_a_rejection(stripe_client, trade):
    async def hang(**kwargs):
        await asyncio.sleep(5)

    stripe_client.create_async.side_effect = hang

    with pytest.raises(ProcessorRejected):
        await CheckoutSessionBuilder(stripe_client, timeout=0.05).create(trade, 700, "USD", None, RETURN_URL, RETURN_URL)
