"""User Routes — registration, login, and the groups-for-user listing.

Invariants:
    - Unknown handle and wrong password produce the same 401 body
    - Persistence and hashing failures produce the generic 500 body
    - Response bodies never include a password hash
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from grouphub.api.dependencies import get_password_hasher, get_store
from grouphub.core.domain_types import UserId
from grouphub.core.errors import CredentialMismatchError, ErrorContext
from grouphub.core.repository_protocols import RelationshipStore
from grouphub.schemas.group import GroupWithMembersResponse
from grouphub.schemas.user import (
    LoginRequest, LoginResponse, RegisterRequest, RegisterResponse,
)
from grouphub.services.credentials import PasswordHasher, authenticate
from grouphub.services.group_projection import list_groups_for_user
from grouphub.services.registration import register_user

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post(
    "/register", response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    store: RelationshipStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Register a new user."""
    user_id = await register_user(
        store, hasher, body.name, body.login_handle, body.password,
    )
    return RegisterResponse(id=user_id.raw)


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    store: RelationshipStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    """Check credentials and return the user's public profile."""
    result = await authenticate(store, hasher, body.login_handle, body.password)
    if not result.authenticated:
        raise CredentialMismatchError(
            result.outcome.value,
            ErrorContext(operation="login", login_handle=body.login_handle),
        )
    user = result.user
    return LoginResponse(
        id=user.id.raw, name=user.name, login_handle=user.login_handle,
    )


@router.get(
    "/{user_id}/groups", response_model=list[GroupWithMembersResponse],
)
async def get_groups(
    user_id: UUID, store: RelationshipStore = Depends(get_store),
):
    """List the user's groups, each with its members."""
    groups = await list_groups_for_user(store, UserId(user_id))
    return [GroupWithMembersResponse.from_projection(g) for g in groups]
