from fastapi import APIRouter, Depends

from shserver.core.security import require_admin
from shserver.interfaces.http.routers import audit, folders, public, scripts


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix, dependencies=[Depends(require_admin)])
    router.include_router(scripts.router, tags=["scripts"])
    router.include_router(folders.router, tags=["folders"])
    router.include_router(audit.router, tags=["audit"])
    return router


def create_public_router() -> APIRouter:
    return public.router


__all__ = [
    "create_api_router",
    "create_public_router",
]
