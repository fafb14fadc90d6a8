"""Domain services for script management."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from shserver.core.crypto import hash_password
from shserver.db.models import generate_uuid
from shserver.infrastructure.database.repositories.script_repository import SqlScriptRepository
from shserver.infrastructure.database.repositories.version_repository import SqlScriptVersionRepository
from shserver.modules.access.service import LockGate
from shserver.modules.audit.models import AuditAction, EntityType, Provenance
from shserver.modules.audit.service import AuditService
from shserver.modules.folders.service import FolderService

from .exceptions import ScriptNotFoundError
from .models import Script, ScriptCreateInput, ScriptRecord, ScriptUpdateInput, ScriptVersion
from .paths import script_name, validate_script_path
from .repository import ScriptRepository, ScriptVersionRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScriptService:
    """Encapsulates script use cases for the admin API."""

    repository: ScriptRepository
    versions: ScriptVersionRepository
    folders: FolderService
    gate: LockGate
    audit: AuditService

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ScriptService":
        return cls(
            SqlScriptRepository(session),
            SqlScriptVersionRepository(session),
            FolderService.with_session(session),
            LockGate.with_session(session),
            AuditService.with_session(session),
        )

    async def list_scripts(self) -> Sequence[Script]:
        return await self.repository.list_scripts()

    async def get_script(self, script_id: str) -> Script | None:
        return await self.repository.get_by_id(script_id)

    async def search(self, query: str) -> Sequence[Script]:
        return await self.repository.search(query)

    async def list_versions(self, script_id: str) -> Sequence[ScriptVersion]:
        if await self.repository.get_by_id(script_id) is None:
            raise ScriptNotFoundError(script_id)
        return await self.versions.list_versions(script_id)

    async def create_script(
        self,
        payload: ScriptCreateInput,
        provenance: Optional[Provenance] = None,
    ) -> Script:
        path = validate_script_path(payload.path)
        password_hash = None
        if payload.locked and payload.password:
            password_hash = await run_in_threadpool(hash_password, payload.password)
        elif payload.locked:
            logger.warning("Script %s is locked without a password; unlock will fail", path)

        await self.folders.ensure_ancestors(path)
        script = await self.repository.create_script(
            generate_uuid(),
            ScriptRecord(
                path=path,
                name=script_name(path),
                content=payload.content,
                description=payload.description,
                tags=payload.tags,
                locked=payload.locked,
                password_hash=password_hash,
                danger_level=int(payload.danger_level),
                requires=payload.requires,
                examples=payload.examples,
            ),
        )
        await self.versions.add_version(script.id, 1, script.content)
        await self.audit.record(
            AuditAction.CREATE,
            EntityType.SCRIPT,
            entity_id=script.id,
            entity_path=script.path,
            provenance=provenance,
        )
        logger.info("Created script %s", script.path)
        return script

    async def update_script(
        self,
        script_id: str,
        payload: ScriptUpdateInput,
        provenance: Optional[Provenance] = None,
    ) -> Script:
        path = validate_script_path(payload.path)
        current = await self.repository.get_by_id(script_id)
        if current is None:
            raise ScriptNotFoundError(script_id)

        password_hash = None
        if payload.locked:
            if payload.password:
                password_hash = await run_in_threadpool(hash_password, payload.password)
            else:
                password_hash = current.password_hash

        if path != current.path:
            await self.folders.ensure_ancestors(path)

        script = await self.repository.update_script(
            script_id,
            ScriptRecord(
                path=path,
                name=script_name(path),
                content=payload.content,
                description=payload.description,
                tags=payload.tags,
                locked=payload.locked,
                password_hash=password_hash,
                danger_level=int(payload.danger_level),
                requires=payload.requires,
                examples=payload.examples,
            ),
        )

        if current.content != payload.content:
            latest = await self.versions.latest_version(script_id)
            await self.versions.add_version(script_id, latest + 1, payload.content)

        if current.locked and password_hash != current.password_hash:
            revoked = await self.gate.revoke_for_script(script_id)
            logger.info("Lock changed for %s, revoked %s tokens", path, revoked)

        await self.audit.record(
            AuditAction.UPDATE,
            EntityType.SCRIPT,
            entity_id=script_id,
            entity_path=path,
            provenance=provenance,
        )
        return script

    async def delete_script(self, script_id: str, provenance: Optional[Provenance] = None) -> None:
        script = await self.repository.get_by_id(script_id)
        if script is None:
            raise ScriptNotFoundError(script_id)

        await self.gate.revoke_for_script(script_id)
        await self.repository.delete_script(script_id)
        await self.audit.record(
            AuditAction.DELETE,
            EntityType.SCRIPT,
            entity_id=script_id,
            entity_path=script.path,
            provenance=provenance,
        )
        logger.info("Deleted script %s", script.path)
