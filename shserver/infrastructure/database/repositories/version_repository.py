"""SQLAlchemy repository for script content versions."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shserver.core.clock import ensure_utc
from shserver.db.models import ScriptVersion as ScriptVersionModel
from shserver.modules.scripts.models import ScriptVersion


class SqlScriptVersionRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def latest_version(self, script_id: str) -> int:
        stmt = select(func.max(ScriptVersionModel.version)).where(ScriptVersionModel.script_id == script_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() or 0

    async def add_version(self, script_id: str, version: int, content: str) -> ScriptVersion:
        model = ScriptVersionModel(script_id=script_id, version=version, content=content)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def list_versions(self, script_id: str) -> Sequence[ScriptVersion]:
        stmt = (
            select(ScriptVersionModel)
            .where(ScriptVersionModel.script_id == script_id)
            .order_by(ScriptVersionModel.version.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: ScriptVersionModel) -> ScriptVersion:
        return ScriptVersion(
            script_id=model.script_id,
            version=int(model.version),
            content=model.content,
            created_at=ensure_utc(model.created_at),
        )
