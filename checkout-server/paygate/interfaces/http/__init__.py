from fastapi import APIRouter

from paygate.interfaces.http.routers import payment


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(payment.router, tags=["payment"])
    return router


__all__ = [
    "create_api_router",
]
