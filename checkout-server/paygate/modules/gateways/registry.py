"""Runtime lookup of payment gateways by name."""

from __future__ import annotations

from typing import Iterable

from paygate.modules.payments.exceptions import GatewayNotFoundError

from .port import PaymentGateway


class GatewayRegistry:
    def __init__(self, gateways: Iterable[PaymentGateway] = ()) -> None:
        self._gateways: dict[str, PaymentGateway] = {}
        for gateway in gateways:
            self.register(gateway)

    def register(self, gateway: PaymentGateway) -> None:
        self._gateways[gateway.name()] = gateway

    def get(self, name: str) -> PaymentGateway:
        try:
            return self._gateways[name]
        except KeyError:
            raise GatewayNotFoundError(name) from None

    def get_enabled(self, name: str) -> PaymentGateway:
        gateway = self.get(name)
        if not gateway.is_enabled():
            raise GatewayNotFoundError(name)
        return gateway

    def enabled(self) -> list[PaymentGateway]:
        return [gateway for gateway in self._gateways.values() if gateway.is_enabled()]

    def __contains__(self, name: object) -> bool:
        return name in self._gateways
