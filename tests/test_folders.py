import asyncio

import pytest

from shserver.modules.audit.models import Provenance
from shserver.modules.folders import FolderNotFoundError
from shserver.modules.scripts import InvalidPathError


async def test_ensure_ancestors_creates_every_prefix(folder_service, folders_repo):
    await folder_service.ensure_ancestors("/a/b/c/run.sh")

    assert sorted(folders_repo.folders) == ["/a", "/a/b", "/a/b/c"]
    assert folders_repo.folders["/a/b"].name == "b"


async def test_ensure_ancestors_is_idempotent(folder_service, folders_repo):
    await folder_service.ensure_ancestors("/a/b/one.sh")
    ids = {path: folder.id for path, folder in folders_repo.folders.items()}

    await folder_service.ensure_ancestors("/a/b/two.sh")

    assert {path: folder.id for path, folder in folders_repo.folders.items()} == ids


async def test_top_level_script_needs_no_folder(folder_service, folders_repo):
    await folder_service.ensure_ancestors("/top.sh")
    assert folders_repo.folders == {}


async def test_concurrent_synthesis_leaves_one_record_per_path(folder_service, folders_repo):
    paths = [f"/shared/deep/tool-{n}.sh" for n in range(8)]

    await asyncio.gather(*(folder_service.ensure_ancestors(path) for path in paths))

    assert sorted(folders_repo.folders) == ["/shared", "/shared/deep"]
    # Several callers raced to insert; the losers saw the conflict and moved on.
    assert folders_repo.create_calls > 2


async def test_create_folder_fills_in_parents_and_audits_once(folder_service, folders_repo, audit_repo):
    folder = await folder_service.create_folder("tools/monitoring/", Provenance("10.0.0.1", None))

    assert folder.path == "/tools/monitoring"
    assert sorted(folders_repo.folders) == ["/tools", "/tools/monitoring"]
    assert [(e.action, e.entity_path) for e in audit_repo.entries] == [("CREATE", "/tools/monitoring")]

    again = await folder_service.create_folder("/tools/monitoring")
    assert again.id == folder.id
    assert len(audit_repo.entries) == 1


async def test_create_folder_rejects_script_like_paths(folder_service):
    with pytest.raises(InvalidPathError):
        await folder_service.create_folder("/tools/run.sh")


async def test_delete_folder_removes_descendant_folders(folder_service, folders_repo, audit_repo):
    await folder_service.ensure_ancestors("/a/b/c/run.sh")
    await folder_service.ensure_ancestors("/ab/run.sh")
    target = folders_repo.folders["/a/b"]

    await folder_service.delete_folder(target.id)

    assert sorted(folders_repo.folders) == ["/a", "/ab"]
    assert audit_repo.actions() == ["DELETE"]


async def test_delete_unknown_folder(folder_service):
    with pytest.raises(FolderNotFoundError):
        await folder_service.delete_folder("missing")


async def test_two_concurrent_calls_create_each_ancestor_once(folder_service, folders_repo):
    await asyncio.gather(
        folder_service.ensure_ancestors("/a/b/c.sh"),
        folder_service.ensure_ancestors("/a/b/c.sh"),
    )

    assert sorted(folders_repo.folders) == ["/a", "/a/b"]
    assert len({folder.id for folder in folders_repo.folders.values()}) == 2
