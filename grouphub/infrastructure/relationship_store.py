"""Relational Store — SQLAlchemy implementation of the RelationshipStore protocol.

Invariants:
    - Each operation issues one statement; writes commit immediately
    - On any SQLAlchemyError the session is rolled back, then PersistenceError is
      raised, so the same session can still run the saga's compensating delete
    - Identity arguments are kind-checked before any SQL is issued
    - Only find_user_by_handle reads password_hash
    - Listings return rows in the order the database yields them (no ORDER BY)

Design Decisions:
    - Wraps a per-request AsyncSession (from get_db) rather than owning an engine:
      the pooled engine is shared process-wide by DatabaseSessionManager
    - Identities generated client-side (uuid4) so the id is known before the
      insert returns, matching the saga's "group id exists before membership" order
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from grouphub.core.domain_types import GroupId, UserId, ensure_kind
from grouphub.core.entities import Group, User, UserRecord
from grouphub.core.errors import ErrorContext, PersistenceError, RecordNotFoundError
from grouphub.models.group import Group as GroupModel
from grouphub.models.user import User as UserModel
from grouphub.models.user_group import UserGroup as UserGroupModel

logger = logging.getLogger(__name__)


class SqlRelationshipStore:
    """Users, groups and memberships over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _statement(
        self, operation: str, context: ErrorContext,
    ) -> AsyncGenerator[None, None]:
        """Map SQLAlchemy failures of one statement to PersistenceError."""
        context.operation = operation
        try:
            yield
        except IntegrityError as e:
            await self.db.rollback()
            logger.error(
                f"DB integrity error in {operation}: {e}",
                extra=context.log_extra(),
            )
            raise PersistenceError(
                "Integrity constraint violated", operation, context,
            ) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"DB error in {operation}: {e}", extra=context.log_extra(),
            )
            raise PersistenceError(
                "Database operation failed", operation, context,
            ) from e

    # ─── Users ──────────────────────────────────────────────────

    async def insert_user(
        self, name: str, login_handle: str, password_hash: str,
    ) -> UserId:
        user_id = UserId.generate()
        ctx = ErrorContext(user_id=str(user_id), login_handle=login_handle)
        async with self._statement("insert_user", ctx):
            await self.db.execute(insert(UserModel).values(
                id=user_id.raw, name=name,
                login_handle=login_handle, password_hash=password_hash,
            ))
            await self.db.commit()
        return user_id

    async def find_user_by_handle(self, login_handle: str) -> UserRecord | None:
        ctx = ErrorContext(login_handle=login_handle)
        async with self._statement("find_user_by_handle", ctx):
            result = await self.db.execute(
                select(
                    UserModel.id, UserModel.name,
                    UserModel.login_handle, UserModel.password_hash,
                ).where(UserModel.login_handle == login_handle),
            )
            row = result.one_or_none()
        if row is None:
            return None
        return UserRecord(
            id=UserId(row.id), name=row.name,
            login_handle=row.login_handle, password_hash=row.password_hash,
        )

    async def find_user_by_id(self, user_id: UserId) -> User:
        ensure_kind(user_id, UserId)
        ctx = ErrorContext(user_id=str(user_id))
        async with self._statement("find_user_by_id", ctx):
            result = await self.db.execute(
                select(UserModel.id, UserModel.name, UserModel.login_handle)
                .where(UserModel.id == user_id.raw),
            )
            row = result.one_or_none()
        if row is None:
            raise RecordNotFoundError("User", str(user_id), ctx)
        return User(id=UserId(row.id), name=row.name, login_handle=row.login_handle)

    # ─── Groups ─────────────────────────────────────────────────

    async def insert_group(self, name: str) -> GroupId:
        group_id = GroupId.generate()
        ctx = ErrorContext(group_id=str(group_id))
        async with self._statement("insert_group", ctx):
            await self.db.execute(
                insert(GroupModel).values(id=group_id.raw, name=name),
            )
            await self.db.commit()
        return group_id

    async def delete_group(self, group_id: GroupId) -> None:
        """Delete a group row. Deleting a missing group is a no-op."""
        ensure_kind(group_id, GroupId)
        ctx = ErrorContext(group_id=str(group_id))
        async with self._statement("delete_group", ctx):
            await self.db.execute(
                delete(GroupModel).where(GroupModel.id == group_id.raw),
            )
            await self.db.commit()

    async def find_group_by_id(self, group_id: GroupId) -> Group:
        ensure_kind(group_id, GroupId)
        ctx = ErrorContext(group_id=str(group_id))
        async with self._statement("find_group_by_id", ctx):
            result = await self.db.execute(
                select(GroupModel.id, GroupModel.name)
                .where(GroupModel.id == group_id.raw),
            )
            row = result.one_or_none()
        if row is None:
            raise RecordNotFoundError("Group", str(group_id), ctx)
        return Group(id=GroupId(row.id), name=row.name)

    # ─── Memberships ────────────────────────────────────────────

    async def insert_membership(self, user_id: UserId, group_id: GroupId) -> None:
        """Unconditional insert; duplicates and dangling ids fail in the database."""
        ensure_kind(user_id, UserId)
        ensure_kind(group_id, GroupId)
        ctx = ErrorContext(user_id=str(user_id), group_id=str(group_id))
        async with self._statement("insert_membership", ctx):
            await self.db.execute(
                insert(UserGroupModel).values(
                    user_id=user_id.raw, group_id=group_id.raw,
                ),
            )
            await self.db.commit()

    async def list_group_ids_for_user(self, user_id: UserId) -> list[GroupId]:
        ensure_kind(user_id, UserId)
        ctx = ErrorContext(user_id=str(user_id))
        async with self._statement("list_group_ids_for_user", ctx):
            result = await self.db.execute(
                select(UserGroupModel.group_id)
                .where(UserGroupModel.user_id == user_id.raw),
            )
            raw_ids = result.scalars().all()
        return [GroupId(raw) for raw in raw_ids]

    async def list_user_ids_for_group(self, group_id: GroupId) -> list[UserId]:
        ensure_kind(group_id, GroupId)
        ctx = ErrorContext(group_id=str(group_id))
        async with self._statement("list_user_ids_for_group", ctx):
            result = await self.db.execute(
                select(UserGroupModel.user_id)
                .where(UserGroupModel.group_id == group_id.raw),
            )
            raw_ids = result.scalars().all()
        return [UserId(raw) for raw in raw_ids]
