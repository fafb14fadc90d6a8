"""Application service exposing the catalog and tree projections."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from shserver.infrastructure.database.repositories.folder_repository import SqlFolderRepository
from shserver.infrastructure.database.repositories.script_repository import SqlScriptRepository
from shserver.modules.folders.repository import FolderRepository
from shserver.modules.scripts.repository import ScriptRepository

from .builder import build_catalog, build_tree
from .models import CatalogEntry, TreeNode


@dataclass(slots=True)
class CatalogService:
    scripts: ScriptRepository
    folders: FolderRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "CatalogService":
        return cls(SqlScriptRepository(session), SqlFolderRepository(session))

    async def catalog(self) -> list[CatalogEntry]:
        return build_catalog(await self.scripts.list_scripts())

    async def tree(self) -> TreeNode:
        scripts = await self.scripts.list_scripts()
        folders = await self.folders.list_folders()
        return build_tree(scripts, folders)
