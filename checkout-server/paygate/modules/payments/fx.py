"""Display-currency to settlement-currency conversion."""

from __future__ import annotations

import logging
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any

import httpx

from .exceptions import RateUnavailable

logger = logging.getLogger(__name__)

# Settlement currencies charged in whole units (no minor unit).
ZERO_DECIMAL_CURRENCIES = frozenset(
    {
        "BIF", "CLP", "DJF", "GNF", "JPY", "KMF", "KRW", "MGA",
        "PYG", "RWF", "UGX", "VND", "VUV", "XAF", "XOF", "XPF",
    }
)


def subdivision_factor(currency: str) -> int:
    return 1 if currency.upper() in ZERO_DECIMAL_CURRENCIES else 100


def to_settlement_units(amount: Decimal, currency: str) -> int:
    """Scale a settlement-currency amount to its smallest unit, truncating."""
    scaled = amount * subdivision_factor(currency)
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


class FXConverter:
    """Converts amounts using a ``/latest/{base}`` style rate endpoint.

    The endpoint is expected to answer with ``{"result": "success",
    "rates": {"USD": 0.14, ...}}``. Any transport failure, timeout,
    non-2xx status or unexpected body shape is reported as
    :class:`RateUnavailable`; nothing is retried.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str, timeout: float = 5.0) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def convert(self, amount: Decimal, source_currency: str, target_currency: str) -> Decimal:
        source = source_currency.upper()
        target = target_currency.upper()
        if source == target:
            return amount
        rate = await self.get_rate(source, target)
        return amount * rate

    async def get_rate(self, source: str, target: str) -> Decimal:
        url = f"{self._base_url}/{source}"
        try:
            response = await self._client.get(url, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            logger.warning("Exchange rate request for %s failed: %s", source, exc)
            raise RateUnavailable(f"rate source unreachable for {source}") from exc
        except ValueError as exc:
            logger.warning("Exchange rate response for %s is not JSON: %s", source, exc)
            raise RateUnavailable(f"rate source returned malformed data for {source}") from exc
        return self._extract_rate(payload, source, target)

    @staticmethod
    def _extract_rate(payload: Any, source: str, target: str) -> Decimal:
        if not isinstance(payload, dict) or payload.get("result") != "success":
            raise RateUnavailable(f"rate source reported an error for {source}")
        rates = payload.get("rates")
        if not isinstance(rates, dict):
            raise RateUnavailable(f"rate source returned no rates for {source}")
        raw = rates.get(target)
        if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
            raise RateUnavailable(f"no {source}->{target} rate available")
        try:
            rate = Decimal(str(raw))
        except InvalidOperation as exc:
            raise RateUnavailable(f"invalid {source}->{target} rate: {raw!r}") from exc
        if not rate.is_finite() or rate <= 0:
            raise RateUnavailable(f"invalid {source}->{target} rate: {raw!r}")
        return rate
