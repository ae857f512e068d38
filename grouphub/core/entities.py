"""Entities — immutable value shapes for User, Group, Membership and projections.

Invariants:
    - User never carries a password hash; only UserRecord does
    - UserRecord is produced by find_user_by_handle and consumed by the authenticator
    - Membership has no identity of its own; the (user_id, group_id) pair is the key
    - All entities are frozen: mutation means building a new value

Design Decisions:
    - Frozen dataclasses over Pydantic models: these never cross the HTTP boundary
      directly, schemas/ owns the wire shape
"""

from dataclasses import dataclass, field

from grouphub.core.domain_types import GroupId, UserId


@dataclass(frozen=True)
class User:
    id: UserId
    name: str
    login_handle: str


@dataclass(frozen=True)
class UserRecord:
    """User as stored, including the bcrypt hash."""
    id: UserId
    name: str
    login_handle: str
    password_hash: str = field(repr=False)

    def to_user(self) -> User:
        return User(id=self.id, name=self.name, login_handle=self.login_handle)


@dataclass(frozen=True)
class Group:
    id: GroupId
    name: str


@dataclass(frozen=True)
class Membership:
    user_id: UserId
    group_id: GroupId


@dataclass(frozen=True)
class GroupWithMembers:
    """Read-side projection: a group and the users belonging to it."""
    group: Group
    members: tuple[User, ...] = ()
