"""Shared fixtures: in-memory storage fakes and an HTTP client on a temporary SQLite file."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient

from shserver.core.config import get_settings
from shserver.modules.access.dispatcher import ScriptDispatcher
from shserver.modules.access.models import AuthToken
from shserver.modules.access.service import LockGate
from shserver.modules.audit.models import AuditEntry
from shserver.modules.audit.service import AuditService
from shserver.modules.folders.exceptions import FolderAlreadyExistsError
from shserver.modules.folders.models import Folder
from shserver.modules.folders.service import FolderService
from shserver.modules.scripts.exceptions import ScriptAlreadyExistsError, ScriptNotFoundError
from shserver.modules.scripts.models import DangerLevel, Script, ScriptRecord, ScriptVersion
from shserver.modules.scripts.service import ScriptService

ADMIN_TOKEN = "test-admin-token"
HOSTNAME = "sh.example.test"


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)


class InMemoryScriptRepository:
    def __init__(self) -> None:
        self.scripts: dict[str, Script] = {}

    async def get_by_id(self, script_id: str) -> Script | None:
        return self.scripts.get(script_id)

    async def get_by_path(self, path: str) -> Script | None:
        return next((s for s in self.scripts.values() if s.path == path), None)

    async def list_scripts(self) -> list[Script]:
        return sorted(self.scripts.values(), key=lambda s: s.path)

    async def search(self, query: str) -> list[Script]:
        return [
            s
            for s in await self.list_scripts()
            if any(query in field for field in (s.name, s.path, s.description, s.tags))
        ]

    async def create_script(self, script_id: str, record: ScriptRecord) -> Script:
        if await self.get_by_path(record.path) is not None:
            raise ScriptAlreadyExistsError(record.path)
        script = self._build(script_id, record)
        self.scripts[script_id] = script
        return script

    async def update_script(self, script_id: str, record: ScriptRecord) -> Script:
        if script_id not in self.scripts:
            raise ScriptNotFoundError(script_id)
        other = await self.get_by_path(record.path)
        if other is not None and other.id != script_id:
            raise ScriptAlreadyExistsError(record.path)
        script = self._build(script_id, record)
        self.scripts[script_id] = script
        return script

    async def delete_script(self, script_id: str) -> None:
        self.scripts.pop(script_id, None)

    @staticmethod
    def _build(script_id: str, record: ScriptRecord) -> Script:
        return Script(
            id=script_id,
            path=record.path,
            name=record.name,
            content=record.content,
            locked=record.locked,
            password_hash=record.password_hash,
            danger_level=DangerLevel(record.danger_level),
            description=record.description,
            tags=record.tags,
            requires=record.requires,
            examples=record.examples,
        )


class InMemoryFolderRepository:
    """Enforces path uniqueness like the real table and yields between reads and writes."""

    def __init__(self) -> None:
        self.folders: dict[str, Folder] = {}
        self.create_calls = 0

    async def get_by_id(self, folder_id: str) -> Folder | None:
        return next((f for f in self.folders.values() if f.id == folder_id), None)

    async def get_by_path(self, path: str) -> Folder | None:
        await asyncio.sleep(0)
        return self.folders.get(path)

    async def list_folders(self) -> list[Folder]:
        return sorted(self.folders.values(), key=lambda f: f.path)

    async def create_folder(self, folder_id: str, path: str, name: str) -> Folder:
        self.create_calls += 1
        await asyncio.sleep(0)
        if path in self.folders:
            raise FolderAlreadyExistsError(path)
        folder = Folder(id=folder_id, path=path, name=name)
        self.folders[path] = folder
        return folder

    async def delete_subtree(self, path: str) -> int:
        doomed = [p for p in self.folders if p == path or p.startswith(path + "/")]
        for p in doomed:
            del self.folders[p]
        return len(doomed)


class InMemoryAuthTokenRepository:
    def __init__(self) -> None:
        self.tokens: dict[str, AuthToken] = {}

    async def get(self, token: str) -> AuthToken | None:
        return self.tokens.get(token)

    async def create(self, *, token, script_id, expires_at, ip_address, user_agent) -> AuthToken:
        record = AuthToken(
            token=token,
            script_id=script_id,
            expires_at=expires_at,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        self.tokens[token] = record
        return record

    async def delete_expired(self, before: datetime) -> int:
        doomed = [t for t, record in self.tokens.items() if record.expires_at < before]
        for t in doomed:
            del self.tokens[t]
        return len(doomed)

    async def delete_for_script(self, script_id: str) -> int:
        doomed = [t for t, record in self.tokens.items() if record.script_id == script_id]
        for t in doomed:
            del self.tokens[t]
        return len(doomed)


class InMemoryAuditLogRepository:
    def __init__(self) -> None:
        self.entries: list[AuditEntry] = []

    async def append(self, *, action, entity_type, entity_id, entity_path, details, ip_address, user_agent) -> None:
        self.entries.append(
            AuditEntry(
                id=len(self.entries) + 1,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                entity_path=entity_path,
                details=details,
                ip_address=ip_address,
                user_agent=user_agent,
                created_at=None,
            )
        )

    async def list_recent(self, limit: int) -> list[AuditEntry]:
        return list(reversed(self.entries))[:limit]

    def actions(self) -> list[str]:
        return [entry.action for entry in self.entries]


class InMemoryScriptVersionRepository:
    def __init__(self) -> None:
        self.versions: list[ScriptVersion] = []

    async def latest_version(self, script_id: str) -> int:
        return max((v.version for v in self.versions if v.script_id == script_id), default=0)

    async def add_version(self, script_id: str, version: int, content: str) -> ScriptVersion:
        entry = ScriptVersion(script_id=script_id, version=version, content=content)
        self.versions.append(entry)
        return entry

    async def list_versions(self, script_id: str) -> list[ScriptVersion]:
        return sorted(
            (v for v in self.versions if v.script_id == script_id),
            key=lambda v: v.version,
            reverse=True,
        )


def make_script(path: str, **overrides: Any) -> Script:
    script = Script(
        id=overrides.pop("id", "id-" + path.strip("/").replace("/", "-")),
        path=path,
        name=path.rsplit("/", 1)[-1],
        content=overrides.pop("content", "echo hello\n"),
    )
    return replace(script, **overrides)


async def ticks_while(coro, interval: float = 0.01) -> tuple[Any, int]:
    """Await ``coro`` while counting how often the event loop got to tick."""
    task = asyncio.ensure_future(coro)
    ticks = 0
    while not task.done():
        await asyncio.sleep(interval)
        ticks += 1
    return task.result(), ticks


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def scripts_repo() -> InMemoryScriptRepository:
    return InMemoryScriptRepository()


@pytest.fixture
def folders_repo() -> InMemoryFolderRepository:
    return InMemoryFolderRepository()


@pytest.fixture
def tokens_repo() -> InMemoryAuthTokenRepository:
    return InMemoryAuthTokenRepository()


@pytest.fixture
def audit_repo() -> InMemoryAuditLogRepository:
    return InMemoryAuditLogRepository()


@pytest.fixture
def versions_repo() -> InMemoryScriptVersionRepository:
    return InMemoryScriptVersionRepository()


@pytest.fixture
def audit(audit_repo) -> AuditService:
    return AuditService(audit_repo)


@pytest.fixture
def gate(tokens_repo, audit, clock) -> LockGate:
    return LockGate(tokens_repo, audit, clock=clock)


@pytest.fixture
def folder_service(folders_repo, audit) -> FolderService:
    return FolderService(folders_repo, audit)


@pytest.fixture
def script_service(scripts_repo, versions_repo, folder_service, gate, audit) -> ScriptService:
    return ScriptService(scripts_repo, versions_repo, folder_service, gate, audit)


@pytest.fixture
def dispatcher(scripts_repo, gate) -> ScriptDispatcher:
    return ScriptDispatcher(scripts_repo, gate)


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path / 'sh-test.db'}")
    monkeypatch.setenv("SECURITY__ADMIN_TOKEN", ADMIN_TOKEN)
    monkeypatch.setenv("SECURITY__TOKEN_SWEEP_INTERVAL_SECONDS", "0")
    monkeypatch.setenv("SITE__HOSTNAME", HOSTNAME)
    get_settings.cache_clear()

    from shserver.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
    get_settings.cache_clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Token": ADMIN_TOKEN}
