"""Admin API guard."""

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shserver.core.config import Settings, get_settings

bearer = HTTPBearer(auto_error=False)


async def require_admin(
    x_admin_token: Optional[str] = Header(default=None),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    settings: Settings = Depends(get_settings),
) -> None:
    expected = settings.admin_token
    if not expected:
        return

    supplied = x_admin_token or (credentials.credentials if credentials else "")
    if not secrets.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8")):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


__all__ = ["bearer", "require_admin"]
