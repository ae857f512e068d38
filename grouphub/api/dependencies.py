"""Request Dependencies — per-request store and process-wide password hasher."""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from grouphub.config import get_settings
from grouphub.infrastructure.database import get_db
from grouphub.infrastructure.relationship_store import SqlRelationshipStore
from grouphub.services.credentials import PasswordHasher


async def get_store(db: AsyncSession = Depends(get_db)) -> SqlRelationshipStore:
    return SqlRelationshipStore(db)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)
