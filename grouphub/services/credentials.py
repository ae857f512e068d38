"""Credential Authenticator — bcrypt hashing, verification, and login checks.

Invariants:
    - hash() salts every call: two hashes of one password differ
    - verify() NEVER raises: malformed or foreign hashes count as "no match"
    - authenticate() returns the User without its hash
    - NOT_FOUND and WRONG_CREDENTIAL are distinct in logs only; callers turn both
      into the same CredentialMismatchError

Design Decisions:
    - bcrypt with configurable cost (settings.bcrypt_rounds); tests lower it
    - Hash/verify run in a worker thread: bcrypt is CPU bound and would block the loop
"""

import asyncio
import logging
from dataclasses import dataclass

import bcrypt

from grouphub.core.domain_types import AuthOutcome
from grouphub.core.entities import User
from grouphub.core.errors import ErrorContext, HashingError
from grouphub.core.repository_protocols import RelationshipStore

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """One-way salted password transform."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")
        except (ValueError, TypeError) as e:
            raise HashingError(str(e)) from e

    def verify(self, plaintext: str, hash_value: str) -> bool:
        try:
            return bcrypt.checkpw(
                plaintext.encode("utf-8"), hash_value.encode("utf-8"),
            )
        except Exception as e:
            # fail closed
            logger.warning(f"Password verification error treated as mismatch: {e}")
            return False


@dataclass(frozen=True)
class AuthResult:
    outcome: AuthOutcome
    user: User | None = None

    @property
    def authenticated(self) -> bool:
        return self.outcome is AuthOutcome.AUTHENTICATED


async def hash_password(hasher: PasswordHasher, plaintext: str) -> str:
    return await asyncio.to_thread(hasher.hash, plaintext)


async def verify_password(
    hasher: PasswordHasher, plaintext: str, hash_value: str,
) -> bool:
    return await asyncio.to_thread(hasher.verify, plaintext, hash_value)


async def authenticate(
    store: RelationshipStore,
    hasher: PasswordHasher,
    login_handle: str,
    plaintext: str,
) -> AuthResult:
    """Check a presented (handle, password) pair against the stored user."""
    ctx = ErrorContext(operation="authenticate", login_handle=login_handle)
    record = await store.find_user_by_handle(login_handle)
    if record is None:
        logger.info(
            f"Authentication failed, handle not found: {login_handle}",
            extra={**ctx.log_extra(), "auth_outcome": AuthOutcome.NOT_FOUND.value},
        )
        return AuthResult(AuthOutcome.NOT_FOUND)

    if not await verify_password(hasher, plaintext, record.password_hash):
        logger.info(
            f"Authentication failed, wrong credential: {login_handle}",
            extra={
                **ctx.log_extra(),
                "user_id": str(record.id),
                "auth_outcome": AuthOutcome.WRONG_CREDENTIAL.value,
            },
        )
        return AuthResult(AuthOutcome.WRONG_CREDENTIAL)

    logger.info(
        f"User authenticated: {login_handle}",
        extra={
            **ctx.log_extra(),
            "user_id": str(record.id),
            "auth_outcome": AuthOutcome.AUTHENTICATED.value,
        },
    )
    return AuthResult(AuthOutcome.AUTHENTICATED, record.to_user())
