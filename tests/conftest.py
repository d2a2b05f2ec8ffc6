"""
tests.conftest

Shared fixtures: an app bound to a throwaway SQLite file, an in-process HTTP
client, and pre-registered identities for the three roles.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from pet_adoption.api.app import create_app
from pet_adoption.settings import Settings
from tests.helpers import register


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    application = create_app(settings=settings)
    # httpx's ASGITransport does not run lifespan; drive it explicitly.
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def admin_login(client: httpx.AsyncClient) -> dict[str, Any]:
    return await register(client, email="admin@example.com", password="admin123", role="admin")


@pytest_asyncio.fixture
async def admin_token(admin_login: dict[str, Any]) -> str:
    return admin_login["token"]


@pytest_asyncio.fixture
async def shelter_login(client: httpx.AsyncClient) -> dict[str, Any]:
    """A shelter operator registered together with a brand-new shelter."""
    return await register(
        client,
        email="operator@abrigo-x.org",
        password="shelter123",
        role="shelter",
        name="Abrigo X",
        address="Rua Um, 1",
        phone="(55) 3222-0000",
    )


@pytest_asyncio.fixture
async def adopter_login(client: httpx.AsyncClient) -> dict[str, Any]:
    return await register(
        client,
        email="joao@example.com",
        password="adopter123",
        role="adopter",
        name="Joao Souza",
        address="Rua Dois, 2",
        phone="(55) 98888-7777",
    )
