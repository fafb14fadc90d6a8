"""Domain models for scripts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Optional


class DangerLevel(IntEnum):
    SAFE = 0
    CAUTION = 1
    DANGEROUS = 2


@dataclass(slots=True)
class Script:
    id: str
    path: str
    name: str
    content: str = field(repr=False)
    locked: bool = False
    password_hash: Optional[str] = field(default=None, repr=False)
    danger_level: DangerLevel = DangerLevel.SAFE
    description: str = ""
    tags: str = ""
    requires: str = ""
    examples: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)


@dataclass(slots=True)
class ScriptVersion:
    script_id: str
    version: int
    content: str = field(repr=False)
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class ScriptCreateInput:
    path: str
    content: str = ""
    description: str = ""
    tags: str = ""
    locked: bool = False
    password: Optional[str] = field(default=None, repr=False)
    danger_level: DangerLevel = DangerLevel.SAFE
    requires: str = ""
    examples: str = ""


@dataclass(slots=True)
class ScriptUpdateInput:
    """Full replacement of a script's editable fields.

    When ``locked`` is true and ``password`` is empty the stored hash is kept.
    """

    path: str
    content: str = ""
    description: str = ""
    tags: str = ""
    locked: bool = False
    password: Optional[str] = field(default=None, repr=False)
    danger_level: DangerLevel = DangerLevel.SAFE
    requires: str = ""
    examples: str = ""


@dataclass(slots=True)
class ScriptRecord:
    """Values persisted for a script; produced by the service, stored by the repository."""

    path: str
    name: str
    content: str = field(repr=False)
    description: str
    tags: str
    locked: bool
    password_hash: Optional[str] = field(repr=False)
    danger_level: int
    requires: str
    examples: str
