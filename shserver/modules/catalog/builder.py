"""Build the flat catalog and the folder tree from script and folder records."""

from __future__ import annotations

from typing import Iterable

from shserver.modules.folders.models import Folder
from shserver.modules.scripts.models import Script
from shserver.modules.scripts.paths import join_segments, path_segments

from .models import FOLDER, SCRIPT, CatalogEntry, TreeNode

ROOT_ID = "root"


def build_catalog(scripts: Iterable[Script]) -> list[CatalogEntry]:
    """Metadata-only listing sorted by path (byte order).

    Locked scripts are listed like any other; their content is withheld at
    fetch time, not here.
    """
    ordered = sorted(scripts, key=lambda script: script.path.encode("utf-8"))
    return [
        CatalogEntry(
            path=script.path,
            name=script.name,
            description=script.description or "",
            tags=script.tags or "",
            locked=bool(script.locked),
        )
        for script in ordered
    ]


def build_tree(scripts: Iterable[Script], folders: Iterable[Folder]) -> TreeNode:
    """Merge explicit folders with folders implied by script paths into one trie.

    Nodes created only because a path passes through them carry no id; an
    explicit folder record at the same path supplies it.
    """
    root = TreeNode(name="/", path="/", type=FOLDER, id=ROOT_ID)

    for folder in folders:
        node = _walk(root, path_segments(folder.path))
        node.id = folder.id

    for script in scripts:
        segments = path_segments(script.path)
        if not segments:
            continue
        parent = _walk(root, segments[:-1])
        parent.add(
            TreeNode(
                name=segments[-1],
                path=script.path,
                type=SCRIPT,
                id=script.id,
                locked=bool(script.locked),
            )
        )

    return root


def _walk(root: TreeNode, segments: list[str]) -> TreeNode:
    node = root
    for depth, segment in enumerate(segments, start=1):
        child = node.folder(segment)
        if child is None:
            child = node.add(TreeNode(name=segment, path=join_segments(segments[:depth]), type=FOLDER))
        node = child
    return node


__all__ = ["ROOT_ID", "build_catalog", "build_tree"]
