"""Folder use cases, including ancestor synthesis for script paths."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from shserver.db.models import generate_uuid
from shserver.infrastructure.database.repositories.folder_repository import SqlFolderRepository
from shserver.modules.audit.models import AuditAction, EntityType, Provenance
from shserver.modules.audit.service import AuditService
from shserver.modules.scripts.paths import ancestor_paths, path_segments, validate_folder_path

from .exceptions import FolderAlreadyExistsError, FolderNotFoundError
from .models import Folder
from .repository import FolderRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FolderService:
    repository: FolderRepository
    audit: AuditService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "FolderService":
        return cls(SqlFolderRepository(session), AuditService.with_session(session))

    async def list_folders(self) -> Sequence[Folder]:
        return await self.repository.list_folders()

    async def get_folder(self, folder_id: str) -> Folder | None:
        return await self.repository.get_by_id(folder_id)

    async def ensure_ancestors(self, script_path: str) -> None:
        """Make sure a folder record exists for every ancestor of ``script_path``.

        Safe to run concurrently for paths sharing ancestors: storage keeps
        folder paths unique and a lost insert race counts as success.
        """
        for folder_path in ancestor_paths(script_path):
            await self._ensure_folder(folder_path)

    async def create_folder(self, raw_path: str, provenance: Optional[Provenance] = None) -> Folder:
        path = validate_folder_path(raw_path)
        await self.ensure_ancestors(path)
        folder, created = await self._ensure_folder(path)
        if created:
            await self.audit.record(
                AuditAction.CREATE,
                EntityType.FOLDER,
                entity_id=folder.id,
                entity_path=folder.path,
                provenance=provenance,
            )
        return folder

    async def delete_folder(self, folder_id: str, provenance: Optional[Provenance] = None) -> None:
        folder = await self.repository.get_by_id(folder_id)
        if folder is None:
            raise FolderNotFoundError(folder_id)
        removed = await self.repository.delete_subtree(folder.path)
        logger.info("Deleted folder %s (%s folder records)", folder.path, removed)
        await self.audit.record(
            AuditAction.DELETE,
            EntityType.FOLDER,
            entity_id=folder.id,
            entity_path=folder.path,
            provenance=provenance,
        )

    async def _ensure_folder(self, path: str) -> tuple[Folder, bool]:
        existing = await self.repository.get_by_path(path)
        if existing is not None:
            return existing, False

        name = path_segments(path)[-1]
        try:
            folder = await self.repository.create_folder(generate_uuid(), path, name)
        except FolderAlreadyExistsError:
            logger.debug("Folder %s created concurrently", path)
            winner = await self.repository.get_by_path(path)
            if winner is None:
                raise
            return winner, False
        logger.debug("Created folder %s", path)
        return folder, True
