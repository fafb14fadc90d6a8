"""SQLAlchemy implementation of the script repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shserver.core.clock import ensure_utc
from shserver.db.models import Script as ScriptModel
from shserver.modules.scripts.exceptions import ScriptAlreadyExistsError, ScriptNotFoundError
from shserver.modules.scripts.models import DangerLevel, Script, ScriptRecord


class SqlScriptRepository:
    """Script repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, script_id: str) -> Script | None:
        model = await self._session.get(ScriptModel, script_id)
        return self._to_domain(model)

    async def get_by_path(self, path: str) -> Script | None:
        stmt = select(ScriptModel).where(ScriptModel.path == path)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_scripts(self) -> Sequence[Script]:
        stmt = select(ScriptModel).order_by(ScriptModel.path)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def search(self, query: str) -> Sequence[Script]:
        stmt = (
            select(ScriptModel)
            .where(
                or_(
                    ScriptModel.name.contains(query, autoescape=True),
                    ScriptModel.path.contains(query, autoescape=True),
                    ScriptModel.description.contains(query, autoescape=True),
                    ScriptModel.tags.contains(query, autoescape=True),
                )
            )
            .order_by(ScriptModel.path)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create_script(self, script_id: str, record: ScriptRecord) -> Script:
        model = ScriptModel(id=script_id)
        self._apply(model, record)
        try:
            async with self._session.begin_nested():
                self._session.add(model)
        except IntegrityError as exc:
            raise ScriptAlreadyExistsError(record.path) from exc
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_script(self, script_id: str, record: ScriptRecord) -> Script:
        model = await self._session.get(ScriptModel, script_id)
        if model is None:
            raise ScriptNotFoundError(script_id)
        try:
            async with self._session.begin_nested():
                self._apply(model, record)
        except IntegrityError as exc:
            raise ScriptAlreadyExistsError(record.path) from exc
        await self._session.refresh(model)
        return self._to_domain(model)

    async def delete_script(self, script_id: str) -> None:
        await self._session.execute(delete(ScriptModel).where(ScriptModel.id == script_id))

    @staticmethod
    def _apply(model: ScriptModel, record: ScriptRecord) -> None:
        model.path = record.path
        model.name = record.name
        model.content = record.content
        model.description = record.description
        model.tags = record.tags
        model.locked = record.locked
        model.password_hash = record.password_hash
        model.danger_level = record.danger_level
        model.requires = record.requires
        model.examples = record.examples

    @staticmethod
    def _to_domain(model: ScriptModel | None) -> Script | None:
        if model is None:
            return None
        return Script(
            id=str(model.id),
            path=model.path,
            name=model.name,
            content=model.content or "",
            locked=bool(model.locked),
            password_hash=model.password_hash,
            danger_level=DangerLevel(model.danger_level or 0),
            description=model.description or "",
            tags=model.tags or "",
            requires=model.requires or "",
            examples=model.examples or "",
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
