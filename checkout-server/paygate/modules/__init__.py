"""Feature modules and their shared exports."""

from . import gateways, payments

__all__ = [
    "gateways",
    "payments",
]
