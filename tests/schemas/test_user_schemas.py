"""Request schemas — boundary validation for registration, login and groups.

Invariants:
    - names and handles are stripped and must not be blank
    - passwords are capped at 72 UTF-8 bytes (bcrypt input limit)
    - creator_id / user_id must be UUIDs
"""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from grouphub.core.domain_types import GroupId, UserId
from grouphub.core.entities import Group, GroupWithMembers, User
from grouphub.schemas.group import GroupCreate, GroupWithMembersResponse, MemberAdd
from grouphub.schemas.user import LoginRequest, RegisterRequest


def test_register_strips_name_and_handle():
    req = RegisterRequest(name="  Alice ", login_handle=" alice1 ", password="pw")
    assert (req.name, req.login_handle) == ("Alice", "alice1")


def test_register_rejects_whitespace_handle():
    with pytest.raises(ValidationError):
        RegisterRequest(name="Alice", login_handle="   ", password="pw")


def test_password_length_capped():
    with pytest.raises(ValidationError):
        LoginRequest(login_handle="alice1", password="x" * 73)


def test_password_cap_counts_bytes_not_chars():
    with pytest.raises(ValidationError):
        RegisterRequest(name="Alice", login_handle="alice1", password="\u00e9" * 72)
    with pytest.raises(ValidationError):
        LoginRequest(login_handle="alice1", password="\u00e9" * 72)


def test_multibyte_password_within_72_bytes_accepted():
    req = RegisterRequest(name="Alice", login_handle="alice1", password="\u00e9" * 36)
    assert len(req.password.encode("utf-8")) == 72


def test_login_strips_handle_like_register():
    login = LoginRequest(login_handle=" bob ", password="pw")
    register = RegisterRequest(name="Bob", login_handle=" bob ", password="pw")
    assert login.login_handle == register.login_handle == "bob"


def test_group_create_requires_uuid_creator():
    with pytest.raises(ValidationError):
        GroupCreate(name="Friends", creator_id="alice1")


def test_group_create_rejects_blank_name():
    with pytest.raises(ValidationError):
        GroupCreate(name="  ", creator_id=uuid4())


def test_member_add_parses_uuid():
    raw = uuid4()
    assert MemberAdd(user_id=str(raw)).user_id == raw


def test_projection_response_exposes_ids_and_names_only():
    alice = User(UserId.generate(), "Alice", "alice1")
    group = Group(GroupId.generate(), "Friends")
    body = GroupWithMembersResponse.from_projection(
        GroupWithMembers(group=group, members=(alice,)),
    ).model_dump()
    assert body == {
        "id": group.id.raw,
        "name": "Friends",
        "members": [{"id": alice.id.raw, "name": "Alice"}],
    }
