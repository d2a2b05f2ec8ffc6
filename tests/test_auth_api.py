"""
tests.test_auth_api

Registration, login, token resolution and the access-control gate over HTTP.
"""

from __future__ import annotations

import asyncio
import uuid
from datetime import timedelta
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy import delete, select

from pet_adoption.auth.jwt import JwtConfig, issue_token
from pet_adoption.db.models import Identity
from pet_adoption.settings import Settings
from tests.helpers import MISSING_ID, bearer, create_shelter, register


async def _me(client: httpx.AsyncClient, token: str) -> httpx.Response:
    return await client.get("/auth/me", headers=bearer(token))


@pytest.mark.asyncio
async def test_admin_registration_has_no_entity(client: httpx.AsyncClient) -> None:
    data = await register(client, email="root@example.com", password="secret1", role="admin")

    assert data["token"]
    assert data["user"]["role"] == "admin"
    assert data["user"]["email"] == "root@example.com"
    assert "entity_id" not in data["user"]
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]


@pytest.mark.asyncio
async def test_shelter_registration_creates_linked_shelter(
    client: httpx.AsyncClient, shelter_login: dict[str, Any]
) -> None:
    shelter_id = shelter_login["user"]["entity_id"]
    assert shelter_login["user"]["role"] == "shelter"

    r = await client.get(f"/shelters/{shelter_id}")
    assert r.status_code == 200
    assert r.json()["name"] == "Abrigo X"
    # The new shelter takes the identity's email.
    assert r.json()["email"] == "operator@abrigo-x.org"


@pytest.mark.asyncio
async def test_adopter_registration_creates_linked_adopter(
    client: httpx.AsyncClient, adopter_login: dict[str, Any]
) -> None:
    r = await client.get(f"/adopters/{adopter_login['user']['entity_id']}")
    assert r.status_code == 200
    assert r.json()["name"] == "Joao Souza"


@pytest.mark.asyncio
async def test_registration_links_existing_shelter(
    client: httpx.AsyncClient, admin_token: str
) -> None:
    shelter = await create_shelter(client, admin_token)

    data = await register(
        client, email="staff@abrigo.org", password="secret1", role="shelter", entity_id=shelter["id"]
    )
    assert data["user"]["entity_id"] == shelter["id"]


@pytest.mark.asyncio
async def test_registration_rejects_entity_of_wrong_type(
    client: httpx.AsyncClient, adopter_login: dict[str, Any]
) -> None:
    # An adopter id does not resolve in the shelter registry.
    r = await client.post(
        "/auth/register",
        json={
            "email": "x@example.com",
            "password": "secret1",
            "role": "shelter",
            "entity_id": adopter_login["user"]["entity_id"],
        },
    )
    assert r.status_code == 404
    assert r.json()["message"] == "Shelter not found."


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("body", "status", "message"),
    [
        ({"password": "secret1", "role": "admin"}, 400, "Email is required."),
        ({"email": "a@example.com", "role": "admin"}, 400, "Password is required."),
        ({"email": "a@example.com", "password": "secret1"}, 400, "Role is required."),
        (
            {"email": "a@example.com", "password": "secret1", "role": "adopter", "entity_id": "xyz"},
            400,
            "Invalid adopter id.",
        ),
        (
            {"email": "a@example.com", "password": "secret1", "role": "adopter", "entity_id": MISSING_ID},
            404,
            "Adopter not found.",
        ),
        (
            {"email": "a@example.com", "password": "secret1", "role": "admin", "name": "Root Org"},
            400,
            "Admin identities cannot be linked to a shelter or adopter.",
        ),
        (
            {"email": "a@example.com", "password": "secret1", "role": "shelter"},
            400,
            "Role 'shelter' requires an entity_id or shelter details (name, address, phone).",
        ),
        (
            {
                "email": "a@example.com",
                "password": "secret1",
                "role": "shelter",
                "entity_id": MISSING_ID,
                "name": "Abrigo",
            },
            400,
            "Provide either entity_id or shelter details, not both.",
        ),
    ],
)
async def test_registration_failures(
    client: httpx.AsyncClient, body: dict[str, Any], status: int, message: str
) -> None:
    r = await client.post("/auth/register", json=body)
    assert r.status_code == status
    assert r.json() == {"message": message}


@pytest.mark.asyncio
async def test_entity_fields_are_validated(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/auth/register",
        json={
            "email": "a@example.com",
            "password": "secret1",
            "role": "adopter",
            "name": "Ana",
            "address": "Rua Tres, 3",
            "phone": "555-1234",
        },
    )
    assert r.status_code == 400
    assert "phone" in r.json()["message"]


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["admin@example.com", "ADMIN@example.com", " Admin@Example.COM "])
async def test_duplicate_email_in_any_case_is_rejected(
    client: httpx.AsyncClient, admin_token: str, email: str
) -> None:
    r = await client.post(
        "/auth/register", json={"email": email, "password": "secret1", "role": "admin"}
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Email already registered."


@pytest.mark.asyncio
async def test_duplicate_entity_rolls_back_identity(
    client: httpx.AsyncClient, shelter_login: dict[str, Any]
) -> None:
    # Same shelter name as the fixture's shelter, fresh email.
    r = await client.post(
        "/auth/register",
        json={
            "email": "other@abrigo-x.org",
            "password": "secret1",
            "role": "shelter",
            "name": "Abrigo X",
            "address": "Rua Um, 1",
            "phone": "(55) 3222-0000",
        },
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Email or shelter name already registered."

    r = await client.post("/auth/login", json={"email": "other@abrigo-x.org", "password": "secret1"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_overlong_password_is_rejected(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/auth/register",
        json={"email": "long@example.com", "password": "a" * 72 + "tail-secret", "role": "admin"},
    )
    assert r.status_code == 400
    assert r.json() == {"message": "Password must be at most 72 bytes."}


@pytest.mark.asyncio
async def test_mutating_the_last_byte_of_a_max_length_password_fails(
    client: httpx.AsyncClient,
) -> None:
    password = "a" * 71 + "z"
    await register(client, email="long@example.com", password=password, role="admin")

    r = await client.post("/auth/login", json={"email": "long@example.com", "password": password})
    assert r.status_code == 200

    for mutated in ("a" * 71 + "y", "a" * 72 + "z"):
        r = await client.post(
            "/auth/login", json={"email": "long@example.com", "password": mutated}
        )
        assert r.status_code == 401
        assert r.json() == {"message": "Invalid credentials."}


@pytest.mark.asyncio
async def test_concurrent_registrations_with_same_email_yield_one_identity(
    client: httpx.AsyncClient,
) -> None:
    body = {"email": "race@example.com", "password": "secret1", "role": "admin"}
    responses = await asyncio.gather(
        *(client.post("/auth/register", json=body) for _ in range(4))
    )

    statuses = sorted(r.status_code for r in responses)
    assert statuses == [201, 400, 400, 400]
    for r in responses:
        if r.status_code == 400:
            assert r.json() == {"message": "Email already registered."}

    r = await client.post("/auth/login", json={"email": "race@example.com", "password": "secret1"})
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_login_succeeds_case_insensitively(
    client: httpx.AsyncClient, admin_login: dict[str, Any]
) -> None:
    r = await client.post("/auth/login", json={"email": "Admin@Example.com", "password": "admin123"})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == admin_login["user"]["id"]
    assert r.json()["token"]


@pytest.mark.asyncio
async def test_login_failures_share_one_message(client: httpx.AsyncClient, admin_token: str) -> None:
    attempts = [
        {"email": "admin@example.com", "password": "admin124"},
        {"email": "admin@example.com", "password": "Admin123"},
        {"email": "nobody@example.com", "password": "admin123"},
    ]
    for body in attempts:
        r = await client.post("/auth/login", json=body)
        assert r.status_code == 401
        assert r.json() == {"message": "Invalid credentials."}


@pytest.mark.asyncio
async def test_login_requires_both_fields(client: httpx.AsyncClient) -> None:
    r = await client.post("/auth/login", json={"email": "admin@example.com"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_token_resolves_to_registered_role_and_entity(
    client: httpx.AsyncClient, shelter_login: dict[str, Any], admin_login: dict[str, Any]
) -> None:
    for login in (shelter_login, admin_login):
        r = await _me(client, login["token"])
        assert r.status_code == 200
        assert r.json()["user"] == login["user"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer"}, {"Authorization": "Basic dXNlcjpwYXNz"}, {"Authorization": "token"}],
)
async def test_missing_or_malformed_header_is_401(
    client: httpx.AsyncClient, headers: dict[str, str]
) -> None:
    r = await client.get("/auth/me", headers=headers)
    assert r.status_code == 401
    assert r.json() == {"message": "Not authorized, no token."}


@pytest.mark.asyncio
async def test_garbage_token_is_401(client: httpx.AsyncClient) -> None:
    r = await _me(client, "definitely.not.valid")
    assert r.status_code == 401
    assert r.json() == {"message": "Not authorized, token invalid."}


@pytest.mark.asyncio
async def test_expired_token_is_rejected_on_protected_routes(
    client: httpx.AsyncClient, settings: Settings, admin_login: dict[str, Any]
) -> None:
    expired = issue_token(
        cfg=JwtConfig.from_settings(settings),
        subject=admin_login["user"]["id"],
        role="admin",
        entity_id=None,
        ttl=timedelta(seconds=-10),
    )
    for method, path in (("GET", "/auth/me"), ("POST", "/shelters"), ("GET", "/adoptions")):
        r = await client.request(method, path, headers=bearer(expired), json={})
        assert r.status_code == 401
        assert r.json() == {"message": "Not authorized, token invalid."}


@pytest.mark.asyncio
async def test_token_signed_with_other_secret_is_rejected(
    client: httpx.AsyncClient, settings: Settings, admin_login: dict[str, Any]
) -> None:
    forged_settings = settings.model_copy(update={"jwt_secret": "attacker"})
    forged = issue_token(
        cfg=JwtConfig.from_settings(forged_settings),
        subject=admin_login["user"]["id"],
        role="admin",
        entity_id=None,
    )
    r = await _me(client, forged)
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_token_for_removed_identity_is_rejected(
    app: FastAPI, client: httpx.AsyncClient, admin_login: dict[str, Any]
) -> None:
    identity_id = uuid.UUID(admin_login["user"]["id"])
    async with app.state.sessionmaker() as session:
        await session.execute(delete(Identity).where(Identity.id == identity_id))
        await session.commit()

    r = await _me(client, admin_login["token"])
    assert r.status_code == 401
    assert r.json() == {"message": "Not authorized, user not found."}


@pytest.mark.asyncio
async def test_password_is_stored_hashed(app: FastAPI, admin_login: dict[str, Any]) -> None:
    async with app.state.sessionmaker() as session:
        identity = (
            await session.execute(select(Identity).where(Identity.email == "admin@example.com"))
        ).scalar_one()
    assert identity.password_hash != "admin123"
    assert identity.password_hash.startswith("$2")
