"""Service test fixtures — async DB, relational store, in-memory fake store, test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - get_db dependency overridden to use the test DB session
    - fake_store fails exactly the operations a test names in fail_on

Design Decisions:
    - SQLite in-memory: fast, no external dependency; PRAGMA foreign_keys=ON so
      membership inserts for unknown users trip the FK like PostgreSQL does
    - fake_store for saga failure paths that a real DB cannot produce on demand
      (e.g. the compensating delete itself failing)
"""

import uuid

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from grouphub.core.domain_types import GroupId, UserId, ensure_kind
from grouphub.core.entities import Group, User, UserRecord
from grouphub.core.errors import PersistenceError, RecordNotFoundError
from grouphub.db.base import Base
import grouphub.models  # noqa: F401
from grouphub.infrastructure.database import get_db, DatabaseSessionManager
from grouphub.infrastructure.relationship_store import SqlRelationshipStore
from grouphub.services.credentials import PasswordHasher
import grouphub.infrastructure.database as db_module
from grouphub.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def store(test_db):
    return SqlRelationshipStore(test_db)


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Readiness check reads db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


class InMemoryRelationshipStore:
    """Dict-backed RelationshipStore with per-operation failure injection.

    Enforces the same constraints the schema does: unique handle, FK on
    memberships, unique membership pair.
    """

    def __init__(self):
        self.users: dict[uuid.UUID, UserRecord] = {}
        self.groups: dict[uuid.UUID, Group] = {}
        self.memberships: list[tuple[uuid.UUID, uuid.UUID]] = []
        self.fail_on: set[str] = set()
        self.calls: list[str] = []

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise PersistenceError("injected failure", operation)

    async def insert_user(self, name, login_handle, password_hash):
        self._enter("insert_user")
        if any(u.login_handle == login_handle for u in self.users.values()):
            raise PersistenceError("Integrity constraint violated", "insert_user")
        user_id = UserId.generate()
        self.users[user_id.raw] = UserRecord(user_id, name, login_handle, password_hash)
        return user_id

    async def find_user_by_handle(self, login_handle):
        self._enter("find_user_by_handle")
        for record in self.users.values():
            if record.login_handle == login_handle:
                return record
        return None

    async def find_user_by_id(self, user_id):
        ensure_kind(user_id, UserId)
        self._enter("find_user_by_id")
        record = self.users.get(user_id.raw)
        if record is None:
            raise RecordNotFoundError("User", str(user_id))
        return record.to_user()

    async def insert_group(self, name):
        self._enter("insert_group")
        group_id = GroupId.generate()
        self.groups[group_id.raw] = Group(group_id, name)
        return group_id

    async def delete_group(self, group_id):
        ensure_kind(group_id, GroupId)
        self._enter("delete_group")
        self.groups.pop(group_id.raw, None)

    async def find_group_by_id(self, group_id):
        ensure_kind(group_id, GroupId)
        self._enter("find_group_by_id")
        group = self.groups.get(group_id.raw)
        if group is None:
            raise RecordNotFoundError("Group", str(group_id))
        return group

    async def insert_membership(self, user_id, group_id):
        ensure_kind(user_id, UserId)
        ensure_kind(group_id, GroupId)
        self._enter("insert_membership")
        pair = (user_id.raw, group_id.raw)
        if (
            user_id.raw not in self.users
            or group_id.raw not in self.groups
            or pair in self.memberships
        ):
            raise PersistenceError("Integrity constraint violated", "insert_membership")
        self.memberships.append(pair)

    async def list_group_ids_for_user(self, user_id):
        ensure_kind(user_id, UserId)
        self._enter("list_group_ids_for_user")
        return [GroupId(g) for u, g in self.memberships if u == user_id.raw]

    async def list_user_ids_for_group(self, group_id):
        ensure_kind(group_id, GroupId)
        self._enter("list_user_ids_for_group")
        return [UserId(u) for u, g in self.memberships if g == group_id.raw]

    def add_user(self, name: str, login_handle: str = "", password_hash: str = "x") -> User:
        """Seed a user directly, bypassing failure injection."""
        user_id = UserId.generate()
        record = UserRecord(user_id, name, login_handle or name.lower(), password_hash)
        self.users[user_id.raw] = record
        return record.to_user()


@pytest.fixture
def fake_store():
    return InMemoryRelationshipStore()
