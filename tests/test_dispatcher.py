import pytest

from shserver.core.crypto import hash_password
from shserver.modules.access.dispatcher import (
    GatedContent,
    LockPrompt,
    NotFound,
    PublicContent,
    extract_token,
)
from shserver.modules.scripts import InvalidPathError, ScriptNotFoundError
from shserver.modules.scripts.models import ScriptRecord

PASSWORD = "open sesame"


async def _store(repo, path, *, locked=False, password_hash=None, content="echo hi\n"):
    return await repo.create_script(
        "id" + path.replace("/", "-"),
        ScriptRecord(
            path=path,
            name=path.rsplit("/", 1)[-1],
            content=content,
            description="",
            tags="",
            locked=locked,
            password_hash=password_hash,
            danger_level=0,
            requires="",
            examples="",
        ),
    )


@pytest.fixture(scope="module")
def password_hash() -> str:
    return hash_password(PASSWORD, rounds=4)


def test_extract_token_prefers_query_parameter():
    assert extract_token("from-query", "Bearer from-header") == "from-query"
    assert extract_token(None, "Bearer from-header") == "from-header"
    assert extract_token("", "bearer from-header") == "from-header"
    assert extract_token(None, "Basic dXNlcjpwYXNz") is None
    assert extract_token(None, "BEARER upper") == "upper"
    assert extract_token(None, "Bearer ") is None
    assert extract_token(None, "Bearer") is None
    assert extract_token(None, None) is None


async def test_public_script_is_served(dispatcher, scripts_repo):
    await _store(scripts_repo, "/tools/hello.sh")

    result = await dispatcher.resolve_and_serve("tools/hello.sh")

    assert isinstance(result, PublicContent)
    assert result.script.content == "echo hi\n"


async def test_missing_script(dispatcher):
    assert await dispatcher.resolve_and_serve("/nope.sh") == NotFound("/nope.sh")


async def test_invalid_path_raises(dispatcher):
    with pytest.raises(InvalidPathError):
        await dispatcher.resolve_and_serve("/tools/hello")


async def test_locked_script_walkthrough(dispatcher, scripts_repo, password_hash):
    await _store(scripts_repo, "/ops/deploy.sh", locked=True, password_hash=password_hash, content="deploy\n")

    assert isinstance(await dispatcher.resolve_and_serve("/ops/deploy.sh"), LockPrompt)

    issued = await dispatcher.verify_unlock("/ops/deploy.sh", PASSWORD)

    via_query = await dispatcher.resolve_and_serve("/ops/deploy.sh", query_token=issued.token)
    via_header = await dispatcher.resolve_and_serve("/ops/deploy.sh", authorization=f"Bearer {issued.token}")
    assert isinstance(via_query, GatedContent)
    assert isinstance(via_header, GatedContent)
    assert via_query.script.content == "deploy\n"

    shadowed = await dispatcher.resolve_and_serve(
        "/ops/deploy.sh", query_token="bogus", authorization=f"Bearer {issued.token}"
    )
    assert isinstance(shadowed, LockPrompt)


async def test_verify_unlock_for_missing_script(dispatcher):
    with pytest.raises(ScriptNotFoundError):
        await dispatcher.verify_unlock("/ghost.sh", PASSWORD)
