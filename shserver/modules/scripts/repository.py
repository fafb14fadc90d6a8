"""Repository protocols for script persistence."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Script, ScriptRecord, ScriptVersion


class ScriptRepository(Protocol):
    """Abstract repository interface for script persistence.

    ``create_script`` and ``update_script`` raise ``ScriptAlreadyExistsError``
    when the path is already taken by another script.
    """

    async def get_by_id(self, script_id: str) -> Script | None:
        ...

    async def get_by_path(self, path: str) -> Script | None:
        ...

    async def list_scripts(self) -> Sequence[Script]:
        ...

    async def search(self, query: str) -> Sequence[Script]:
        ...

    async def create_script(self, script_id: str, record: ScriptRecord) -> Script:
        ...

    async def update_script(self, script_id: str, record: ScriptRecord) -> Script:
        ...

    async def delete_script(self, script_id: str) -> None:
        ...


class ScriptVersionRepository(Protocol):
    async def latest_version(self, script_id: str) -> int:
        ...

    async def add_version(self, script_id: str, version: int, content: str) -> ScriptVersion:
        ...

    async def list_versions(self, script_id: str) -> Sequence[ScriptVersion]:
        ...
