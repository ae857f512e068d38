"""User Routes — register, login, groups listing through the HTTP surface.

Tests cover:
    - register returns 201 with a fresh id
    - duplicate handle returns the generic 500 body
    - unknown handle and wrong password return byte-identical 401 responses
    - successful login returns id, name, login_handle and no hash
    - fresh user lists no groups
    - malformed payloads return 400 with field details
    - a padded handle registers and logs in as the same stripped handle
    - a multibyte password over 72 bytes is a 400, not a hashing failure
    - a store failure during login is a 500, never a 401
"""

import logging
from uuid import UUID, uuid4

from grouphub.api.dependencies import get_store
from grouphub.main import app


async def _register(client, name="Alice", handle="alice1", password="pw123"):
    return await client.post(
        "/api/v1/users/register",
        json={"name": name, "login_handle": handle, "password": password},
    )


async def test_register_returns_new_id(client):
    res = await _register(client)
    assert res.status_code == 201
    UUID(res.json()["id"])


async def test_register_duplicate_handle_is_server_error(client):
    await _register(client)
    res = await _register(client, name="Mallory", password="evil")
    assert res.status_code == 500
    assert res.json() == {
        "error": {"code": "SERVER_ERROR", "message": "An unexpected error occurred"},
    }


async def test_login_failures_are_indistinguishable(client, caplog):
    await _register(client)

    with caplog.at_level(logging.INFO, logger="grouphub.services.credentials"):
        unknown = await client.post(
            "/api/v1/users/login",
            json={"login_handle": "nobody", "password": "pw123"},
        )
        wrong = await client.post(
            "/api/v1/users/login",
            json={"login_handle": "alice1", "password": "wrong"},
        )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.content == wrong.content
    outcomes = [
        r.auth_outcome for r in caplog.records
        if r.name == "grouphub.services.credentials"
    ]
    assert outcomes == ["not_found", "wrong_credential"]


async def test_login_success_payload(client):
    user_id = (await _register(client)).json()["id"]

    res = await client.post(
        "/api/v1/users/login",
        json={"login_handle": "alice1", "password": "pw123"},
    )

    assert res.status_code == 200
    assert res.json() == {"id": user_id, "name": "Alice", "login_handle": "alice1"}


async def test_fresh_user_has_no_groups(client):
    user_id = (await _register(client)).json()["id"]
    res = await client.get(f"/api/v1/users/{user_id}/groups")
    assert res.status_code == 200
    assert res.json() == []


async def test_unknown_user_has_no_groups(client):
    res = await client.get(f"/api/v1/users/{uuid4()}/groups")
    assert res.status_code == 200
    assert res.json() == []


async def test_register_rejects_blank_name(client):
    res = await _register(client, name="   ")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_login_rejects_missing_password(client):
    res = await client.post("/api/v1/users/login", json={"login_handle": "alice1"})
    assert res.status_code == 400
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert "body.password" in fields


async def test_padded_handle_logs_in_after_register(client):
    user_id = (await _register(client, name="Bob", handle=" bob ")).json()["id"]

    res = await client.post(
        "/api/v1/users/login",
        json={"login_handle": " bob ", "password": "pw123"},
    )

    assert res.status_code == 200
    assert res.json() == {"id": user_id, "name": "Bob", "login_handle": "bob"}


async def test_register_multibyte_password_over_72_bytes_rejected(client):
    res = await _register(client, password="é" * 72)
    assert res.status_code == 400
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert "body.password" in fields


async def test_login_store_failure_is_server_error(client, fake_store):
    fake_store.add_user("Alice", "alice1")
    fake_store.fail_on = {"find_user_by_handle"}
    app.dependency_overrides[get_store] = lambda: fake_store

    res = await client.post(
        "/api/v1/users/login",
        json={"login_handle": "alice1", "password": "pw123"},
    )

    assert res.status_code == 500
    assert res.json() == {
        "error": {"code": "SERVER_ERROR", "message": "An unexpected error occurred"},
    }
    assert fake_store.calls == ["find_user_by_handle"]
