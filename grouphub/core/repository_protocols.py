"""Boundary Protocols — contract between the services and the relational store.

Invariants:
    - Every operation is one statement; no multi-statement transaction is offered
    - Every operation raises PersistenceError (core/errors.py) on failure
    - find_user_by_handle is the only operation returning a password hash
    - Identity arguments are kind-checked by implementations (ensure_kind)

Design Decisions:
    - Protocol over ABC: structural subtyping, the SQL store and the test fakes
      share no base class
    - Async in Protocol: implementations do IO
"""

from typing import Protocol

from grouphub.core.domain_types import GroupId, UserId
from grouphub.core.entities import Group, User, UserRecord


class RelationshipStore(Protocol):
    """Persistence capability for users, groups and memberships."""

    async def insert_user(
        self, name: str, login_handle: str, password_hash: str,
    ) -> UserId: ...
    async def find_user_by_handle(self, login_handle: str) -> UserRecord | None: ...
    async def find_user_by_id(self, user_id: UserId) -> User: ...

    async def insert_group(self, name: str) -> GroupId: ...
    async def delete_group(self, group_id: GroupId) -> None: ...
    async def find_group_by_id(self, group_id: GroupId) -> Group: ...

    async def insert_membership(self, user_id: UserId, group_id: GroupId) -> None: ...
    async def list_group_ids_for_user(self, user_id: UserId) -> list[GroupId]: ...
    async def list_user_ids_for_group(self, group_id: GroupId) -> list[UserId]: ...
