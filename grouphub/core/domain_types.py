"""Domain Types — kind-tagged identities and workflow state enums.

Invariants:
    - UserId and GroupId wrap a UUID; the same UUID under two kinds is NOT equal
    - A GroupId is never accepted where a UserId is required (type checker via
      Id[Kind], runtime via ensure_kind at every store boundary)
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - Generic Id[Kind] over NewType: NewType erases to UUID at runtime, so a
      mixed-up id would slip through to SQL unnoticed
    - Markers are empty classes: they carry no data, only the kind
    - str Enums: serialize to JSON log extras without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar
from uuid import UUID, uuid4


# ─── Entity Kind Markers ─────────────────────────────────────────

class UserKind:
    """Marker for identities naming a User."""


class GroupKind:
    """Marker for identities naming a Group."""


KindT = TypeVar("KindT")
IdT = TypeVar("IdT", bound="Id")


# ─── Identity Types ──────────────────────────────────────────────

@dataclass(frozen=True)
class Id(Generic[KindT]):
    """Opaque identity of one entity instance, tagged with its kind."""
    raw: UUID

    def __post_init__(self):
        if not isinstance(self.raw, UUID):
            raise TypeError(
                f"{type(self).__name__} requires a UUID, got {type(self.raw).__name__}",
            )
        if self.raw.int == 0:
            raise ValueError(f"{type(self).__name__} cannot be the nil UUID")

    @classmethod
    def generate(cls: type[IdT]) -> IdT:
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.raw)


@dataclass(frozen=True)
class UserId(Id[UserKind]):
    """Identity of a User."""


@dataclass(frozen=True)
class GroupId(Id[GroupKind]):
    """Identity of a Group."""


def ensure_kind(value: object, kind: type[IdT]) -> IdT:
    """Reject an identity of the wrong kind (or a bare UUID) at a call boundary."""
    if type(value) is not kind:
        raise TypeError(
            f"expected {kind.__name__}, got {type(value).__name__}",
        )
    return value


# ─── Enums ───────────────────────────────────────────────────────

class AuthOutcome(str, Enum):
    """Result of checking a presented credential against the store."""
    AUTHENTICATED = "authenticated"
    NOT_FOUND = "not_found"
    WRONG_CREDENTIAL = "wrong_credential"


class SagaState(str, Enum):
    """Group-creation saga states.

    START -> GROUP_CREATED -> MEMBERSHIP_BOUND on success;
    GROUP_CREATED -> COMPENSATING_DELETE -> FAILED when the membership insert fails;
    START -> FAILED when the group insert fails.
    """
    START = "start"
    GROUP_CREATED = "group_created"
    MEMBERSHIP_BOUND = "membership_bound"
    COMPENSATING_DELETE = "compensating_delete"
    FAILED = "failed"
