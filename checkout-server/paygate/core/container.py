"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import httpx
import stripe

from paygate.core.config import Settings, get_settings
from paygate.infrastructure.database.session import get_engine
from paygate.modules.gateways import GatewayRegistry, StripeGateway
from paygate.modules.payments import CheckoutSessionBuilder, FXConverter, WebhookVerifier


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    http_client: httpx.AsyncClient
    gateways: GatewayRegistry

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()

    async def aclose(self) -> None:
        await self.http_client.aclose()


def build_stripe_client(settings: Settings) -> stripe.StripeClient:
    # retries stay with the caller: a failed session creation fails the purchase
    return stripe.StripeClient(
        settings.stripe.api_key,
        http_client=stripe.HTTPXClient(timeout=settings.stripe.timeout),
        max_network_retries=0,
    )


def build_gateways(settings: Settings, http_client: httpx.AsyncClient) -> GatewayRegistry:
    stripe_gateway = StripeGateway(
        settings=settings,
        fx=FXConverter(http_client, settings.exchange.base_url, timeout=settings.exchange.timeout),
        checkout=CheckoutSessionBuilder(build_stripe_client(settings), timeout=settings.stripe.timeout),
        verifier=WebhookVerifier(tolerance=settings.stripe.webhook_tolerance),
    )
    return GatewayRegistry([stripe_gateway])


@lru_cache()
def get_container() -> ApplicationContainer:
    settings = get_settings()
    http_client = httpx.AsyncClient(timeout=settings.exchange.timeout)
    container = ApplicationContainer(
        settings=settings,
        http_client=http_client,
        gateways=build_gateways(settings, http_client),
    )
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "build_gateways", "build_stripe_client", "get_container"]
