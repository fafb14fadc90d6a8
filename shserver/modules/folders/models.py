"""Domain models for folders."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Folder:
    id: str
    path: str
    name: str
    created_at: Optional[datetime] = None
