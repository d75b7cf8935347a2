"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .payments import get_enabled_gateway, get_gateway_registry

__all__ = [
    "get_db_session",
    "get_enabled_gateway",
    "get_gateway_registry",
]
