import datetime as dt

import jwt
import pytest

from storerating.core.security import JWT_ALG, JWT_SECRET
from storerating.models.user import Role


pytestmark = pytest.mark.asyncio


def forge_token(**claims) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    payload = {"sub": "1", "email": "x@storerating.io", "role": "user", "iat": now, "exp": now + dt.timedelta(hours=1)}
    payload.update(claims)
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer ", "Token"])
async def test_missing_token_is_401(client, header):
    headers = {} if header is None else {"Authorization": header}
    resp = await client.get("/api/admin/users", headers=headers)
    assert resp.status_code == 401
    assert resp.json() == {"message": "Access token required"}


async def test_expired_token_is_rejected(client):
    past = dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=1)
    token = forge_token(iat=past - dt.timedelta(hours=1), exp=past)
    resp = await client.get("/api/stores", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
    assert resp.json() == {"message": "Invalid token"}


async def test_token_signed_with_other_secret_is_rejected(client):
    token = jwt.encode({"sub": "1", "email": "x@storerating.io", "role": "admin"}, "another-secret", algorithm=JWT_ALG)
    resp = await client.get("/api/admin/dashboard", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
    assert resp.json() == {"message": "Admin access required"}


async def test_unknown_role_claim_is_an_invalid_token(client):
    token = forge_token(role="superuser")
    resp = await client.get("/api/store-owner/stores", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 403
    assert resp.json() == {"message": "Store owner access required"}


async def test_validity_is_checked_before_body(client):
    # A bad token wins over a bad body
    resp = await client.post(
        "/api/ratings", json={"storeId": "nope"}, headers={"Authorization": "Bearer garbage"}
    )
    assert resp.status_code == 403
    assert resp.json() == {"message": "Only users can submit ratings"}


async def test_role_is_taken_from_token(client, create_user, headers_for):
    owner = await create_user(role=Role.STORE_OWNER)
    resp = await client.get("/api/store-owner/stores", headers=headers_for(owner))
    assert resp.status_code == 200

    # Promoting the account does not change what an already issued token grants
    owner.role = Role.ADMIN
    await owner.save()
    still_owner = await client.get("/api/admin/users", headers=headers_for_role(owner, Role.STORE_OWNER))
    assert still_owner.status_code == 403


def headers_for_role(user, role: Role) -> dict[str, str]:
    token = forge_token(sub=str(user.id), email=user.email, role=role.value)
    return {"Authorization": f"Bearer {token}"}


async def test_healthz_is_public(client):
    resp = await client.get("/healthz")
    assert resp.status_code == 200


@pytest.mark.parametrize(
    "method, path",
    [
        ("POST", "/api/ratings"),
        ("POST", "/api/admin/users"),
        ("POST", "/api/admin/stores"),
        ("PUT", "/api/admin/users/1"),
        ("PUT", "/api/auth/password"),
    ],
)
async def test_token_is_checked_before_malformed_body(client, method, path):
    malformed = {"content": b"{not json", "headers": {"Content-Type": "application/json"}}

    missing = await client.request(method, path, **malformed)
    assert missing.status_code == 401
    assert missing.json() == {"message": "Access token required"}

    garbage = await client.request(
        method, path, content=malformed["content"],
        headers={**malformed["headers"], "Authorization": "Bearer garbage"},
    )
    assert garbage.status_code == 403


async def test_malformed_body_after_guard_is_a_validation_error(client, create_user, headers_for):
    user = await create_user()
    resp = await client.post(
        "/api/ratings",
        content=b"{not json",
        headers={"Content-Type": "application/json", **headers_for(user)},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Validation error"

    empty = await client.post("/api/ratings", headers=headers_for(user))
    assert empty.status_code == 400
    assert empty.json()["message"] == "Validation error"
