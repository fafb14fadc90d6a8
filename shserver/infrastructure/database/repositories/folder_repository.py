"""SQLAlchemy implementation of the folder repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shserver.core.clock import ensure_utc
from shserver.db.models import Folder as FolderModel
from shserver.modules.folders.exceptions import FolderAlreadyExistsError
from shserver.modules.folders.models import Folder


class SqlFolderRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, folder_id: str) -> Folder | None:
        return self._to_domain(await self._session.get(FolderModel, folder_id))

    async def get_by_path(self, path: str) -> Folder | None:
        stmt = select(FolderModel).where(FolderModel.path == path)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_folders(self) -> Sequence[Folder]:
        stmt = select(FolderModel).order_by(FolderModel.path)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create_folder(self, folder_id: str, path: str, name: str) -> Folder:
        model = FolderModel(id=folder_id, path=path, name=name)
        # Savepoint keeps a lost uniqueness race from aborting the request transaction.
        try:
            async with self._session.begin_nested():
                self._session.add(model)
        except IntegrityError as exc:
            raise FolderAlreadyExistsError(path) from exc
        await self._session.refresh(model)
        return self._to_domain(model)

    async def delete_subtree(self, path: str) -> int:
        prefix = path.rstrip("/") + "/"
        stmt = delete(FolderModel).where(
            or_(
                FolderModel.path == path,
                FolderModel.path.startswith(prefix, autoescape=True),
            )
        )
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    @staticmethod
    def _to_domain(model: FolderModel | None) -> Folder | None:
        if model is None:
            return None
        return Folder(
            id=str(model.id),
            path=model.path,
            name=model.name,
            created_at=ensure_utc(model.created_at),
        )
