"""SQLAlchemy repository for the append-only audit log."""

from __future__ import annotations

import json
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shserver.core.clock import ensure_utc
from shserver.db.models import AuditLog as AuditLogModel
from shserver.modules.audit.models import AuditEntry


class SqlAuditLogRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(
        self,
        *,
        action: str,
        entity_type: str,
        entity_id: str | None,
        entity_path: str | None,
        details: dict[str, Any] | None,
        ip_address: str | None,
        user_agent: str | None,
    ) -> None:
        model = AuditLogModel(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            entity_path=entity_path,
            details=json.dumps(details, ensure_ascii=False) if details else None,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self._session.add(model)
        # Committed right away so failed unlock attempts survive the 401 response.
        await self._session.commit()

    async def list_recent(self, limit: int) -> Sequence[AuditEntry]:
        stmt = select(AuditLogModel).order_by(AuditLogModel.id.desc()).limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: AuditLogModel) -> AuditEntry:
        details = None
        if model.details:
            try:
                details = json.loads(model.details)
            except json.JSONDecodeError:
                details = None
        return AuditEntry(
            id=int(model.id),
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            entity_path=model.entity_path,
            details=details,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            created_at=ensure_utc(model.created_at),
        )
