"""Domain service for audit log operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from shserver.infrastructure.database.repositories.audit_repository import SqlAuditLogRepository

from .models import AuditAction, AuditEntry, EntityType, Provenance
from .repository import AuditLogRepository


@dataclass(slots=True)
class AuditService:
    repository: AuditLogRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AuditService":
        return cls(SqlAuditLogRepository(session))

    async def record(
        self,
        action: AuditAction,
        entity_type: EntityType,
        *,
        entity_id: Optional[str] = None,
        entity_path: Optional[str] = None,
        provenance: Optional[Provenance] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        provenance = provenance or Provenance()
        await self.repository.append(
            action=action.value,
            entity_type=entity_type.value,
            entity_id=entity_id,
            entity_path=entity_path,
            details=details,
            ip_address=provenance.ip_address,
            user_agent=provenance.user_agent,
        )

    async def list_recent(self, limit: int = 100) -> Sequence[AuditEntry]:
        return await self.repository.list_recent(limit)
