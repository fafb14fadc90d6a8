"""Password -> token -> content gate for locked scripts.

A caller fetching a locked script without a valid token receives a prompt
script. The prompt posts the password to the unlock endpoint, which answers
with a token valid for a single script and a fixed five minutes; the prompt
then fetches the script again with that token. Nothing is stored for the
prompt step itself.

Token failures (missing, unknown, expired, issued for another script) all
collapse into ``NeedsPassword`` so callers cannot probe which tokens exist.
Tokens are not bound to IP or User-Agent; both are recorded for audit only.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from shserver.core.clock import Clock, utcnow
from shserver.core.crypto import verify_password
from shserver.infrastructure.database.repositories.auth_token_repository import SqlAuthTokenRepository
from shserver.modules.audit.models import AuditAction, EntityType, Provenance
from shserver.modules.audit.service import AuditService
from shserver.modules.scripts.models import Script

from .exceptions import InvalidPasswordError, PasswordNotConfiguredError, ScriptNotLockedError
from .models import AccessDecision, AccessGranted, IssuedToken, NeedsPassword
from .repository import AuthTokenRepository

logger = logging.getLogger(__name__)

UNLOCK_TOKEN_TTL = timedelta(minutes=5)


def generate_token() -> str:
    return secrets.token_urlsafe(32)


@dataclass(slots=True)
class LockGate:
    tokens: AuthTokenRepository
    audit: AuditService
    clock: Clock = utcnow
    token_factory: Callable[[], str] = field(default=generate_token)

    @classmethod
    def with_session(cls, session: AsyncSession) -> "LockGate":
        return cls(SqlAuthTokenRepository(session), AuditService.with_session(session))

    @staticmethod
    def is_locked(script: Script) -> bool:
        return bool(script.locked)

    async def request_access(self, script: Script, supplied_token: Optional[str]) -> AccessDecision:
        if not self.is_locked(script):
            return AccessGranted(script)
        if not supplied_token:
            return NeedsPassword(script)

        record = await self.tokens.get(supplied_token)
        if record is not None and record.is_valid_for(script.id, self.clock()):
            return AccessGranted(script)
        logger.debug("Token rejected for %s", script.path)
        return NeedsPassword(script)

    async def verify_password(
        self,
        script: Script,
        password: str,
        provenance: Optional[Provenance] = None,
    ) -> IssuedToken:
        if not self.is_locked(script):
            raise ScriptNotLockedError(script.path)
        if not script.password_hash:
            logger.error("Locked script %s has no password hash", script.path)
            raise PasswordNotConfiguredError(script.path)

        provenance = provenance or Provenance()
        # bcrypt blocks for tens of milliseconds; run it off the event loop.
        if not await run_in_threadpool(verify_password, password, script.password_hash):
            logger.info("Unlock failed for %s", script.path)
            await self.audit.record(
                AuditAction.UNLOCK_FAILED,
                EntityType.SCRIPT,
                entity_id=script.id,
                entity_path=script.path,
                provenance=provenance,
            )
            raise InvalidPasswordError(script.path)

        expires_at = self.clock() + UNLOCK_TOKEN_TTL
        token = await self.tokens.create(
            token=self.token_factory(),
            script_id=script.id,
            expires_at=expires_at,
            ip_address=provenance.ip_address,
            user_agent=provenance.user_agent,
        )
        # The token is already durable; an audit failure below is not rolled back.
        await self.audit.record(
            AuditAction.UNLOCK_SUCCESS,
            EntityType.SCRIPT,
            entity_id=script.id,
            entity_path=script.path,
            provenance=provenance,
        )
        logger.info("Unlocked %s until %s", script.path, expires_at.isoformat())
        return IssuedToken(token=token.token, expires_at=token.expires_at)

    async def revoke_for_script(self, script_id: str) -> int:
        return await self.tokens.delete_for_script(script_id)

    async def purge_expired(self) -> int:
        return await self.tokens.delete_expired(self.clock())


__all__ = ["LockGate", "UNLOCK_TOKEN_TTL", "generate_token"]
