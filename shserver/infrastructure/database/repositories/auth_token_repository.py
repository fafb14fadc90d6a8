"""SQLAlchemy repository for gating tokens.

Writes are committed immediately: a token must stay issued even if a later
write in the same request (the audit entry) fails.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from shserver.core.clock import ensure_utc
from shserver.db.models import AuthToken as AuthTokenModel
from shserver.modules.access.models import AuthToken


class SqlAuthTokenRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, token: str) -> AuthToken | None:
        stmt = select(AuthTokenModel).where(AuthTokenModel.token == token)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def create(
        self,
        *,
        token: str,
        script_id: str,
        expires_at: datetime,
        ip_address: str | None,
        user_agent: str | None,
    ) -> AuthToken:
        model = AuthTokenModel(
            token=token,
            script_id=script_id,
            expires_at=expires_at,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self._session.add(model)
        await self._session.commit()
        return AuthToken(
            token=token,
            script_id=script_id,
            expires_at=expires_at,
            ip_address=ip_address,
            user_agent=user_agent,
        )

    async def delete_expired(self, before: datetime) -> int:
        stmt = delete(AuthTokenModel).where(AuthTokenModel.expires_at < before)
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def delete_for_script(self, script_id: str) -> int:
        stmt = delete(AuthTokenModel).where(AuthTokenModel.script_id == script_id)
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    @staticmethod
    def _to_domain(model: AuthTokenModel | None) -> AuthToken | None:
        if model is None:
            return None
        return AuthToken(
            token=model.token,
            script_id=model.script_id,
            expires_at=ensure_utc(model.expires_at),
            created_at=ensure_utc(model.created_at),
            ip_address=model.ip_address,
            user_agent=model.user_agent,
        )
