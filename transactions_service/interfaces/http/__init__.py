from fastapi import APIRouter

from transactions_service.interfaces.http.routers import admin, wallets


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(wallets.router, tags=["wallets"])
    router.include_router(admin.router, tags=["admin"])
    return router


__all__ = [
    "create_api_router",
]
