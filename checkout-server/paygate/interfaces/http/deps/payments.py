"""Payment gateway dependency providers."""

from fastapi import Depends, HTTPException, Path, status

from paygate.core.container import get_container
from paygate.modules.gateways import GatewayRegistry, PaymentGateway
from paygate.modules.payments import GatewayNotFoundError


def get_gateway_registry() -> GatewayRegistry:
    return get_container().gateways


def get_enabled_gateway(
    gateway: str = Path(..., description="Gateway name, e.g. stripe"),
    registry: GatewayRegistry = Depends(get_gateway_registry),
) -> PaymentGateway:
    try:
        return registry.get_enabled(gateway)
    except GatewayNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown payment gateway: {gateway}") from exc


__all__ = [
    "get_enabled_gateway",
    "get_gateway_registry",
]
