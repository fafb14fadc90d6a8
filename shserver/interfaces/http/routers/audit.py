"""Read-only audit trail for operators."""

from typing import List

from fastapi import APIRouter, Depends, Query

from shserver.interfaces.http.deps import get_audit_service
from shserver.modules.audit.service import AuditService
from shserver.schemas import AuditEntryResponse

router = APIRouter()


@router.get("/audit", response_model=List[AuditEntryResponse], summary="Recent audit entries")
async def list_audit(
    limit: int = Query(default=100, ge=1, le=1000),
    service: AuditService = Depends(get_audit_service),
):
    return [AuditEntryResponse.model_validate(entry) for entry in await service.list_recent(limit)]
