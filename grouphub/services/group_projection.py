"""Group Projection — assemble each of a user's groups with its member list.

Invariants:
    - Read-only: no store writes
    - Any failed lookup aborts the whole assembly (no partial results)
    - Groups and members keep the order the store returned them in
    - A user with no memberships yields an empty list, not an error
"""

from grouphub.core.domain_types import GroupId, UserId
from grouphub.core.entities import GroupWithMembers
from grouphub.core.repository_protocols import RelationshipStore


async def assemble_group(
    store: RelationshipStore, group_id: GroupId,
) -> GroupWithMembers:
    group = await store.find_group_by_id(group_id)
    members = []
    for user_id in await store.list_user_ids_for_group(group_id):
        members.append(await store.find_user_by_id(user_id))
    return GroupWithMembers(group=group, members=tuple(members))


async def list_groups_for_user(
    store: RelationshipStore, user_id: UserId,
) -> list[GroupWithMembers]:
    group_ids = await store.list_group_ids_for_user(user_id)
    return [await assemble_group(store, group_id) for group_id in group_ids]
