"""
tests.helpers

Payload builders and small HTTP helpers shared by the API tests.
"""

from __future__ import annotations

from typing import Any

import httpx

SHELTER_FIELDS = {
    "name": "Abrigo Quarta Colonia",
    "address": "Rua das Flores, 100",
    "phone": "(55) 3222-1234",
    "email": "contato@abrigo.org",
}

ADOPTER_FIELDS = {
    "name": "Maria Silva",
    "address": "Av. Brasil, 42",
    "phone": "(55) 99876-5432",
    "email": "maria@example.com",
}

MISSING_ID = "0b9f6a3e-5d1c-4c8e-9f0a-2f6a7d1e4b3c"


def animal_payload(shelter_id: str | None = None, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": "Rex",
        "species": "dog",
        "breed": "mixed",
        "age": 3,
        "sex": "male",
        "description": "Friendly dog who loves long walks.",
        "photos": ["https://photos.example.com/rex.jpg"],
    }
    if shelter_id is not None:
        payload["shelter_owner_id"] = shelter_id
    payload.update(overrides)
    return payload


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def register(client: httpx.AsyncClient, **body: Any) -> dict[str, Any]:
    r = await client.post("/auth/register", json=body)
    assert r.status_code == 201, r.text
    return r.json()


async def create_shelter(client: httpx.AsyncClient, token: str, **overrides: Any) -> dict[str, Any]:
    r = await client.post("/shelters", json={**SHELTER_FIELDS, **overrides}, headers=bearer(token))
    assert r.status_code == 201, r.text
    return r.json()


async def create_adopter(client: httpx.AsyncClient, token: str, **overrides: Any) -> dict[str, Any]:
    r = await client.post("/adopters", json={**ADOPTER_FIELDS, **overrides}, headers=bearer(token))
    assert r.status_code == 201, r.text
    return r.json()


async def create_animal(
    client: httpx.AsyncClient, token: str, shelter_id: str | None, **overrides: Any
) -> dict[str, Any]:
    r = await client.post(
        "/animals", json=animal_payload(shelter_id, **overrides), headers=bearer(token)
    )
    assert r.status_code == 201, r.text
    return r.json()
