"""Domain models for script access gating."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union

from shserver.modules.scripts.models import Script


@dataclass(slots=True)
class AuthToken:
    token: str = field(repr=False)
    script_id: str
    expires_at: datetime
    created_at: Optional[datetime] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    def is_valid_for(self, script_id: str, now: datetime) -> bool:
        return self.script_id == script_id and self.expires_at > now


@dataclass(slots=True, frozen=True)
class IssuedToken:
    token: str
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class AccessGranted:
    script: Script


@dataclass(slots=True, frozen=True)
class NeedsPassword:
    script: Script


AccessDecision = Union[AccessGranted, NeedsPassword]
