"""
tests.test_users_api

Profile self-service and the admin-only user collection.
"""

from __future__ import annotations

import httpx
import pytest


@pytest.mark.asyncio
async def test_profile_read_and_update_for_any_role(client: httpx.AsyncClient, seed_user) -> None:
    member, member_h = await seed_user("mia", "member")

    r = await client.get("/v1/users/profile", headers=member_h)
    assert r.status_code == 200
    assert r.json()["data"]["id"] == member["id"]

    # Role in the body is ignored for self-service updates.
    r = await client.put(
        "/v1/users/profile",
        headers=member_h,
        json={"name": "Mia M.", "role": "admin"},
    )
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["name"] == "Mia M."
    assert data["role"] == "member"
    assert data["email"] == "mia@example.com"


@pytest.mark.asyncio
async def test_profile_requires_authentication(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/users/profile")
    assert r.status_code == 401
    assert r.json()["error"]["reason"] == "Unauthenticated"


@pytest.mark.asyncio
async def test_profile_email_conflict(client: httpx.AsyncClient, seed_user) -> None:
    await seed_user("mia", "member")
    _, otto_h = await seed_user("otto", "member")

    r = await client.put("/v1/users/profile", headers=otto_h, json={"email": "mia@example.com"})
    assert r.status_code == 409
    assert r.json()["error"]["reason"] == "Conflict"


@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["member", "moderator"])
async def test_user_collection_is_admin_only(client: httpx.AsyncClient, seed_user, role) -> None:
    admin, _ = await seed_user("alice", "admin")
    _, headers = await seed_user("caller", role)

    for method, path in [
        ("GET", "/v1/users"),
        ("GET", f"/v1/users/{admin['id']}"),
        ("PUT", f"/v1/users/{admin['id']}"),
        ("DELETE", f"/v1/users/{admin['id']}"),
        ("DELETE", "/v1/users/does-not-exist"),
    ]:
        r = await client.request(method, path, headers=headers, json={} if method == "PUT" else None)
        assert r.status_code == 401, (method, path)
        assert r.json()["error"]["reason"] == "InsufficientRole"


@pytest.mark.asyncio
async def test_admin_manages_users(client: httpx.AsyncClient, seed_user) -> None:
    _, admin_h = await seed_user("alice", "admin")
    member, member_h = await seed_user("mia", "member")

    r = await client.get("/v1/users", headers=admin_h)
    assert r.status_code == 200
    assert r.json()["count"] == 2

    r = await client.get(f"/v1/users/{member['id']}", headers=admin_h)
    assert r.status_code == 200
    assert r.json()["data"]["email"] == "mia@example.com"

    r = await client.get("/v1/users/does-not-exist", headers=admin_h)
    assert r.status_code == 404

    # Promotion takes effect on the member's next request.
    r = await client.put(f"/v1/users/{member['id']}", headers=admin_h, json={"role": "moderator"})
    assert r.status_code == 200
    assert r.json()["data"]["role"] == "moderator"
    r = await client.post("/v1/resources", headers=member_h, json={"name": "now allowed"})
    assert r.status_code == 201

    r = await client.delete(f"/v1/users/{member['id']}", headers=admin_h)
    assert r.status_code == 200

    # The deleted user's token no longer resolves to a principal.
    r = await client.get("/v1/users/profile", headers=member_h)
    assert r.status_code == 401
    assert r.json()["error"]["reason"] == "Unauthenticated"
