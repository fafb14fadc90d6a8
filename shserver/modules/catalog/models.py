"""Catalog and tree projections. Computed on demand, never persisted."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

FOLDER = "folder"
SCRIPT = "script"


@dataclass(slots=True, frozen=True)
class CatalogEntry:
    path: str
    name: str
    description: str = ""
    tags: str = ""
    locked: bool = False

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"path": self.path, "name": self.name}
        if self.description:
            payload["description"] = self.description
        if self.tags:
            payload["tags"] = self.tags
        payload["locked"] = self.locked
        return payload


@dataclass(slots=True)
class TreeNode:
    name: str
    path: str
    type: str
    id: Optional[str] = None
    locked: bool = False
    # Keyed by (type, name) so a folder and a script may share a name.
    children: dict[tuple[str, str], "TreeNode"] = field(default_factory=dict)

    @property
    def is_folder(self) -> bool:
        return self.type == FOLDER

    def folder(self, name: str) -> Optional["TreeNode"]:
        return self.children.get((FOLDER, name))

    def add(self, node: "TreeNode") -> "TreeNode":
        self.children[(node.type, node.name)] = node
        return node

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "type": self.type,
        }
        if self.is_folder:
            payload["children"] = [child.to_dict() for child in self.children.values()]
        else:
            payload["locked"] = self.locked
        return payload
