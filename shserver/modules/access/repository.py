"""Repository protocol for gating tokens."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .models import AuthToken


class AuthTokenRepository(Protocol):
    async def get(self, token: str) -> AuthToken | None:
        ...

    async def create(
        self,
        *,
        token: str,
        script_id: str,
        expires_at: datetime,
        ip_address: str | None,
        user_agent: str | None,
    ) -> AuthToken:
        ...

    async def delete_expired(self, before: datetime) -> int:
        ...

    async def delete_for_script(self, script_id: str) -> int:
        ...
