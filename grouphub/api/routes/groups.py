"""Group Routes — group creation (saga) and adding members.

Invariants:
    - Any saga failure (group insert or membership insert) is one generic 500
    - Add member returns 204 with no body
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from grouphub.api.dependencies import get_store
from grouphub.core.domain_types import GroupId, UserId
from grouphub.core.repository_protocols import RelationshipStore
from grouphub.schemas.group import GroupCreate, GroupCreated, MemberAdd
from grouphub.services.group_creation import add_member, create_group

router = APIRouter(prefix="/api/v1/groups", tags=["groups"])


@router.post(
    "", response_model=GroupCreated, status_code=status.HTTP_201_CREATED,
)
async def create(
    body: GroupCreate, store: RelationshipStore = Depends(get_store),
):
    """Create a group with the creator as its first member."""
    group_id = await create_group(store, body.name, UserId(body.creator_id))
    return GroupCreated(id=group_id.raw)


@router.post("/{group_id}/members", status_code=status.HTTP_204_NO_CONTENT)
async def add_group_member(
    group_id: UUID,
    body: MemberAdd,
    store: RelationshipStore = Depends(get_store),
):
    """Add an existing user to an existing group."""
    await add_member(store, UserId(body.user_id), GroupId(group_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
