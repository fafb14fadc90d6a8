import time

import pytest

from conftest import ticks_while
from shserver.core.crypto import PasswordTooLongError, hash_password, verify_password
from shserver.modules.access import AccessGranted, NeedsPassword
from shserver.modules.audit.models import Provenance
from shserver.modules.scripts import (
    DangerLevel,
    InvalidPathError,
    ScriptAlreadyExistsError,
    ScriptCreateInput,
    ScriptNotFoundError,
    ScriptUpdateInput,
)


async def test_create_script_normalises_and_records_everything(
    script_service, scripts_repo, folders_repo, versions_repo, audit_repo
):
    script = await script_service.create_script(
        ScriptCreateInput(
            path="tools/net/ping.sh",
            content="ping -c1 example.com\n",
            description="Ping a host",
            tags="net",
            danger_level=DangerLevel.CAUTION,
        ),
        Provenance("192.0.2.10", "Mozilla/5.0"),
    )

    assert script.path == "/tools/net/ping.sh"
    assert script.name == "ping.sh"
    assert script.danger_level is DangerLevel.CAUTION
    assert script.password_hash is None
    assert sorted(folders_repo.folders) == ["/tools", "/tools/net"]
    assert [(v.version, v.content) for v in versions_repo.versions] == [(1, "ping -c1 example.com\n")]
    entry = audit_repo.entries[-1]
    assert (entry.action, entry.entity_type, entry.entity_path) == ("CREATE", "script", "/tools/net/ping.sh")
    assert entry.ip_address == "192.0.2.10"


async def test_create_rejects_bad_paths_before_writing(script_service, scripts_repo, folders_repo):
    with pytest.raises(InvalidPathError):
        await script_service.create_script(ScriptCreateInput(path="/tools/ping"))
    assert scripts_repo.scripts == {}
    assert folders_repo.folders == {}


async def test_duplicate_path_conflicts(script_service):
    await script_service.create_script(ScriptCreateInput(path="/dup.sh"))
    with pytest.raises(ScriptAlreadyExistsError):
        await script_service.create_script(ScriptCreateInput(path="dup.sh"))


async def test_locked_script_password_is_hashed(script_service):
    script = await script_service.create_script(
        ScriptCreateInput(path="/ops/deploy.sh", locked=True, password="s3cret")
    )

    assert script.locked is True
    assert script.password_hash != "s3cret"
    assert verify_password("s3cret", script.password_hash)


async def test_password_ignored_for_unlocked_script(script_service):
    script = await script_service.create_script(ScriptCreateInput(path="/open.sh", password="unused"))
    assert script.password_hash is None


async def test_update_keeps_hash_when_password_blank(script_service):
    created = await script_service.create_script(
        ScriptCreateInput(path="/ops/deploy.sh", locked=True, password="s3cret", content="v1\n")
    )

    updated = await script_service.update_script(
        created.id, ScriptUpdateInput(path="/ops/deploy.sh", locked=True, password="", content="v1\n")
    )

    assert updated.password_hash == created.password_hash


async def test_update_content_adds_version(script_service, versions_repo):
    created = await script_service.create_script(ScriptCreateInput(path="/a.sh", content="one\n"))

    await script_service.update_script(created.id, ScriptUpdateInput(path="/a.sh", content="two\n"))
    await script_service.update_script(created.id, ScriptUpdateInput(path="/a.sh", content="two\n", tags="t"))

    versions = await script_service.list_versions(created.id)
    assert [(v.version, v.content) for v in versions] == [(2, "two\n"), (1, "one\n")]


async def test_update_move_synthesises_new_ancestors(script_service, scripts_repo, folders_repo):
    created = await script_service.create_script(ScriptCreateInput(path="/a.sh"))

    moved = await script_service.update_script(created.id, ScriptUpdateInput(path="/new/home/a.sh"))

    assert moved.path == "/new/home/a.sh"
    assert moved.name == "a.sh"
    assert sorted(folders_repo.folders) == ["/new", "/new/home"]
    assert await scripts_repo.get_by_path("/a.sh") is None


async def test_update_into_taken_path_conflicts(script_service):
    await script_service.create_script(ScriptCreateInput(path="/one.sh"))
    two = await script_service.create_script(ScriptCreateInput(path="/two.sh"))

    with pytest.raises(ScriptAlreadyExistsError):
        await script_service.update_script(two.id, ScriptUpdateInput(path="/one.sh"))


async def test_update_unknown_script(script_service):
    with pytest.raises(ScriptNotFoundError):
        await script_service.update_script("missing", ScriptUpdateInput(path="/x.sh"))


async def test_password_change_revokes_tokens(script_service, gate):
    created = await script_service.create_script(
        ScriptCreateInput(path="/ops/deploy.sh", locked=True, password="old")
    )
    issued = await gate.verify_password(created, "old")

    updated = await script_service.update_script(
        created.id, ScriptUpdateInput(path="/ops/deploy.sh", locked=True, password="new")
    )

    assert isinstance(await gate.request_access(updated, issued.token), NeedsPassword)


async def test_metadata_edit_keeps_tokens(script_service, gate):
    created = await script_service.create_script(
        ScriptCreateInput(path="/ops/deploy.sh", locked=True, password="pw")
    )
    issued = await gate.verify_password(created, "pw")

    updated = await script_service.update_script(
        created.id, ScriptUpdateInput(path="/ops/deploy.sh", locked=True, description="now documented")
    )

    assert isinstance(await gate.request_access(updated, issued.token), AccessGranted)


async def test_delete_script_revokes_and_audits(script_service, scripts_repo, tokens_repo, audit_repo, gate):
    created = await script_service.create_script(
        ScriptCreateInput(path="/ops/deploy.sh", locked=True, password="pw")
    )
    await gate.verify_password(created, "pw")

    await script_service.delete_script(created.id)

    assert scripts_repo.scripts == {}
    assert tokens_repo.tokens == {}
    assert audit_repo.actions() == ["CREATE", "UNLOCK_SUCCESS", "DELETE"]


async def test_delete_unknown_script(script_service):
    with pytest.raises(ScriptNotFoundError):
        await script_service.delete_script("missing")


async def test_search_matches_metadata(script_service):
    await script_service.create_script(ScriptCreateInput(path="/net/ping.sh", description="reachability"))
    await script_service.create_script(ScriptCreateInput(path="/disk/usage.sh", tags="storage"))

    assert [s.path for s in await script_service.search("reach")] == ["/net/ping.sh"]
    assert [s.path for s in await script_service.search("storage")] == ["/disk/usage.sh"]
    assert [s.path for s in await script_service.search("usage")] == ["/disk/usage.sh"]


async def test_overlong_password_is_refused_before_writing(script_service, scripts_repo):
    with pytest.raises(PasswordTooLongError):
        await script_service.create_script(
            ScriptCreateInput(path="/ops/deploy.sh", locked=True, password="p" * 73)
        )
    assert scripts_repo.scripts == {}


def test_verify_rejects_overlong_and_malformed_input():
    stored = hash_password("short", rounds=4)
    assert verify_password("short", stored)
    assert not verify_password("x" * 100, stored)
    assert not verify_password("short", "not-a-bcrypt-hash")


async def test_password_hashing_does_not_block_the_event_loop(script_service, monkeypatch):
    def slow_hash(password):
        time.sleep(0.2)
        return "hashed:" + password

    monkeypatch.setattr("shserver.modules.scripts.service.hash_password", slow_hash)

    script, ticks = await ticks_while(
        script_service.create_script(ScriptCreateInput(path="/ops/slow.sh", locked=True, password="pw"))
    )

    assert script.password_hash == "hashed:pw"
    assert ticks >= 5
