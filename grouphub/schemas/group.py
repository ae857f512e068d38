"""Group Schemas — group creation, membership and the groups-for-user projection."""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from grouphub.core.entities import GroupWithMembers


class GroupCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    creator_id: UUID

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class GroupCreated(BaseModel):
    id: UUID


class MemberAdd(BaseModel):
    user_id: UUID


class MemberInfo(BaseModel):
    id: UUID
    name: str


class GroupWithMembersResponse(BaseModel):
    id: UUID
    name: str
    members: list[MemberInfo]

    @classmethod
    def from_projection(cls, projection: GroupWithMembers) -> "GroupWithMembersResponse":
        return cls(
            id=projection.group.id.raw,
            name=projection.group.name,
            members=[
                MemberInfo(id=user.id.raw, name=user.name)
                for user in projection.members
            ],
        )
