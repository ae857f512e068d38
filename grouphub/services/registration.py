"""User Registration — hash the password, then insert the user row.

Invariants:
    - The plaintext password never reaches the store
    - A duplicate login handle fails in the database (unique constraint) and
      surfaces as PersistenceError; the existing row is untouched
"""

import logging

from grouphub.core.domain_types import UserId
from grouphub.core.repository_protocols import RelationshipStore
from grouphub.services.credentials import PasswordHasher, hash_password

logger = logging.getLogger(__name__)


async def register_user(
    store: RelationshipStore,
    hasher: PasswordHasher,
    name: str,
    login_handle: str,
    password: str,
) -> UserId:
    password_hash = await hash_password(hasher, password)
    user_id = await store.insert_user(name, login_handle, password_hash)
    logger.info(
        f"New user registered: name={name}",
        extra={
            "operation": "register",
            "user_id": str(user_id),
            "login_handle": login_handle,
        },
    )
    return user_id
