from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from paygate.core.config import DatabaseSettings, ExchangeSettings, PaymentSettings, Settings, StripeSettings
from paygate.core.security import CurrentUser, get_current_user
from paygate.db import models  # noqa: F401
from paygate.infrastructure.database import Base, engine_options
from paygate.interfaces.http.deps import get_db_session, get_gateway_registry
from paygate.main import create_app
from paygate.modules.gateways import GatewayRegistry, StripeGateway
from paygate.modules.payments import CheckoutSessionBuilder, FXConverter, WebhookVerifier

from tests.support import CHECKOUT_URL, RATES_URL, WEBHOOK_SECRET


class RateSource:
    """Stands in for the exchange-rate HTTP endpoint."""

    def __init__(self) -> None:
        self.rates: dict = {"USD": 0.14}
        self.error: Exception | None = None
        self.status_code = 200
        self.requests: list[httpx.Request] = []
        self.on_request = None

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            await self.on_request(request)
        if self.error is not None:
            raise self.error
        base = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(
            self.status_code,
            json={"result": "success", "base_code": base, "rates": self.rates},
        )


class FakeStripeClient:
    def __init__(self) -> None:
        self.create_async = AsyncMock(return_value=SimpleNamespace(id="cs_test_123", url=CHECKOUT_URL))
        self.v1 = SimpleNamespace(checkout=SimpleNamespace(sessions=SimpleNamespace(create_async=self.create_async)))

    @property
    def last_params(self) -> dict:
        return self.create_async.call_args.kwargs["params"]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        payment=PaymentSettings(
            base_url="https://panel.example.com",
            active_gateways=["stripe"],
            display_currency="CNY",
        ),
        stripe=StripeSettings(
            api_key="sk_test_dummy",
            endpoint_secret=WEBHOOK_SECRET,
            currency="USD",
            min_recharge=Decimal("10"),
            max_recharge=Decimal("1000"),
        ),
        exchange=ExchangeSettings(base_url=RATES_URL),
    )


@pytest.fixture
async def engine(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'checkout.db'}"
    engine = create_async_engine(url, **engine_options(DatabaseSettings(url=url)))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def rate_source() -> RateSource:
    return RateSource()


@pytest.fixture
async def http_client(rate_source):
    async with httpx.AsyncClient(transport=httpx.MockTransport(rate_source)) as client:
        yield client


@pytest.fixture
def stripe_client() -> FakeStripeClient:
    return FakeStripeClient()


@pytest.fixture
def fx(http_client) -> FXConverter:
    return FXConverter(http_client, RATES_URL, timeout=1.0)


@pytest.fixture
def gateway(settings, fx, stripe_client) -> StripeGateway:
    return StripeGateway(
        settings=settings,
        fx=fx,
        checkout=CheckoutSessionBuilder(stripe_client, timeout=1.0),
        verifier=WebhookVerifier(tolerance=settings.stripe.webhook_tolerance),
    )


@pytest.fixture
def buyer() -> CurrentUser:
    return CurrentUser(id="user-1", email="buyer@example.com")


@pytest.fixture
def app(session_factory, gateway, buyer):
    app = create_app()

    async def override_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_gateway_registry] = lambda: GatewayRegistry([gateway])
    app.dependency_overrides[get_current_user] = lambda: buyer
    return app


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
