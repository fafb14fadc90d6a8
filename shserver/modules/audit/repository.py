"""Repository protocol for the audit log."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import AuditEntry


class AuditLogRepository(Protocol):
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
        ...

    async def list_recent(self, limit: int) -> Sequence[AuditEntry]:
        ...
