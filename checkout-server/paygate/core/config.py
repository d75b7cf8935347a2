"""Application configuration using pydantic settings with structured sections."""

from decimal import Decimal
from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./checkout.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    # seconds a SQLite writer waits on a locked database, e.g. concurrent webhook redeliveries
    busy_timeout: float = 15.0


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"


class PaymentSettings(BaseModel):
    base_url: str = "http://localhost:8000"
    active_gateways: list[str] = Field(default_factory=lambda: ["stripe"])
    display_currency: str = "CNY"


class StripeSettings(BaseModel):
    api_key: str = ""
    endpoint_secret: str = ""
    currency: str = "USD"
    min_recharge: Decimal = Decimal("10")
    max_recharge: Decimal = Decimal("1000")
    webhook_tolerance: int = 300
    timeout: float = 15.0


class ExchangeSettings(BaseModel):
    base_url: str = "https://open.er-api.com/v6/latest"
    timeout: float = 5.0


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "Checkout Server"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    payment: PaymentSettings = PaymentSettings()
    stripe: StripeSettings = StripeSettings()
    exchange: ExchangeSettings = ExchangeSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm


@lru_cache()
def get_settings() -> Settings:
    return Settings()
