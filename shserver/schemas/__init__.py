"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from shserver.modules.scripts.models import DangerLevel


class UnlockRequest(BaseModel):
    path: str = Field(..., min_length=1)
    password: str


class UnlockResponse(BaseModel):
    token: str
    expires_at: str = Field(..., description="RFC 3339 timestamp")


class ScriptBase(BaseModel):
    path: str = Field(..., min_length=1, description="e.g. /tools/sysinfo.sh")
    content: str = ""
    description: str = ""
    tags: str = Field(default="", description="comma separated")
    locked: bool = False
    danger_level: DangerLevel = DangerLevel.SAFE
    requires: str = Field(default="", description="comma separated, e.g. curl,jq")
    examples: str = ""


class ScriptCreate(ScriptBase):
    password: Optional[str] = None


class ScriptUpdate(ScriptBase):
    password: Optional[str] = Field(default=None, description="leave empty to keep the current password")


class ScriptResponse(BaseModel):
    id: str
    path: str
    name: str
    content: str
    description: str
    tags: str
    locked: bool
    danger_level: int
    requires: str
    examples: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ScriptVersionResponse(BaseModel):
    script_id: str
    version: int
    content: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class FolderCreate(BaseModel):
    path: str = Field(..., min_length=1, description="e.g. /tools/monitoring")


class FolderResponse(BaseModel):
    id: str
    path: str
    name: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuditEntryResponse(BaseModel):
    id: int
    action: str
    entity_type: str
    entity_id: Optional[str] = None
    entity_path: Optional[str] = None
    details: Optional[dict[str, Any]] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
