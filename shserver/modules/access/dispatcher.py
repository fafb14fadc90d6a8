"""Resolve a requested script path to the response it should produce."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.ext.asyncio import AsyncSession

from shserver.infrastructure.database.repositories.script_repository import SqlScriptRepository
from shserver.modules.audit.models import Provenance
from shserver.modules.scripts.exceptions import ScriptNotFoundError
from shserver.modules.scripts.models import Script
from shserver.modules.scripts.paths import validate_script_path
from shserver.modules.scripts.repository import ScriptRepository

from .models import AccessGranted, IssuedToken
from .service import LockGate


@dataclass(slots=True, frozen=True)
class PublicContent:
    script: Script


@dataclass(slots=True, frozen=True)
class LockPrompt:
    script: Script


@dataclass(slots=True, frozen=True)
class GatedContent:
    script: Script


@dataclass(slots=True, frozen=True)
class NotFound:
    path: str


ServeResult = Union[PublicContent, LockPrompt, GatedContent, NotFound]


def extract_token(query_token: Optional[str], authorization: Optional[str]) -> Optional[str]:
    """The ``token`` query parameter wins over an ``Authorization: Bearer`` header."""
    if query_token:
        return query_token
    scheme, credentials = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not credentials:
        return None
    return credentials


@dataclass(slots=True)
class ScriptDispatcher:
    scripts: ScriptRepository
    gate: LockGate

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ScriptDispatcher":
        return cls(SqlScriptRepository(session), LockGate.with_session(session))

    async def resolve(self, raw_path: str) -> Script | None:
        return await self.scripts.get_by_path(validate_script_path(raw_path))

    async def resolve_and_serve(
        self,
        raw_path: str,
        query_token: Optional[str] = None,
        authorization: Optional[str] = None,
    ) -> ServeResult:
        path = validate_script_path(raw_path)
        script = await self.scripts.get_by_path(path)
        if script is None:
            return NotFound(path)
        if not self.gate.is_locked(script):
            return PublicContent(script)

        decision = await self.gate.request_access(script, extract_token(query_token, authorization))
        if isinstance(decision, AccessGranted):
            return GatedContent(script)
        return LockPrompt(script)

    async def verify_unlock(
        self,
        raw_path: str,
        password: str,
        provenance: Optional[Provenance] = None,
    ) -> IssuedToken:
        path = validate_script_path(raw_path)
        script = await self.scripts.get_by_path(path)
        if script is None:
            raise ScriptNotFoundError(path)
        return await self.gate.verify_password(script, password, provenance)


__all__ = [
    "GatedContent",
    "LockPrompt",
    "NotFound",
    "PublicContent",
    "ScriptDispatcher",
    "ServeResult",
    "extract_token",
]
