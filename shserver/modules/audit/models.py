"""Domain models for audit entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    UNLOCK_SUCCESS = "UNLOCK_SUCCESS"
    UNLOCK_FAILED = "UNLOCK_FAILED"


class EntityType(str, Enum):
    SCRIPT = "script"
    FOLDER = "folder"


@dataclass(slots=True, frozen=True)
class Provenance:
    """Where a request came from. Recorded for audit only, never enforced."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


@dataclass(slots=True)
class AuditEntry:
    id: int
    action: str
    entity_type: str
    entity_id: Optional[str]
    entity_path: Optional[str]
    details: Optional[dict[str, Any]]
    ip_address: Optional[str]
    user_agent: Optional[str]
    created_at: Optional[datetime]
