"""Service dependency providers."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shserver.modules.access.dispatcher import ScriptDispatcher
from shserver.modules.audit.models import Provenance
from shserver.modules.audit.service import AuditService
from shserver.modules.catalog.service import CatalogService
from shserver.modules.folders.service import FolderService
from shserver.modules.scripts.service import ScriptService

from .database import get_db_session


def get_provenance(request: Request) -> Provenance:
    client = request.client
    return Provenance(
        ip_address=client.host if client else None,
        user_agent=request.headers.get("user-agent"),
    )


def get_dispatcher(db: AsyncSession = Depends(get_db_session)) -> ScriptDispatcher:
    return ScriptDispatcher.with_session(db)


def get_catalog_service(db: AsyncSession = Depends(get_db_session)) -> CatalogService:
    return CatalogService.with_session(db)


def get_script_service(db: AsyncSession = Depends(get_db_session)) -> ScriptService:
    return ScriptService.with_session(db)


def get_folder_service(db: AsyncSession = Depends(get_db_session)) -> FolderService:
    return FolderService.with_session(db)


def get_audit_service(db: AsyncSession = Depends(get_db_session)) -> AuditService:
    return AuditService.with_session(db)


__all__ = [
    "get_audit_service",
    "get_catalog_service",
    "get_dispatcher",
    "get_folder_service",
    "get_provenance",
    "get_script_service",
]
