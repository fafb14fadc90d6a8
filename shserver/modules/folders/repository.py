"""Repository protocol for folders."""

from __future__ import annotations

from typing import Protocol, Sequence

from .models import Folder


class FolderRepository(Protocol):
    async def get_by_id(self, folder_id: str) -> Folder | None:
        ...

    async def get_by_path(self, path: str) -> Folder | None:
        ...

    async def list_folders(self) -> Sequence[Folder]:
        ...

    async def create_folder(self, folder_id: str, path: str, name: str) -> Folder:
        """Insert a folder record.

        Raises ``FolderAlreadyExistsError`` when ``path`` is already taken.
        """
        ...

    async def delete_subtree(self, path: str) -> int:
        """Delete the folder at ``path`` and every folder below it."""
        ...
