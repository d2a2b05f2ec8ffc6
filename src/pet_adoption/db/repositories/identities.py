"""
pet_adoption.db.repositories.identities

Credential store: repository for `Identity` records.

Responsibilities:
- Persist identities with a password hash (never the plaintext).
- Look identities up by id (token resolution) and by email (login).
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pet_adoption.db.models import Identity, Role


class IdentityRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        email: str,
        password_hash: str,
        role: Role,
        entity_id: uuid.UUID | None,
    ) -> Identity:
        identity = Identity(
            email=email.strip().lower(),
            password_hash=password_hash,
            role=role,
            entity_id=entity_id,
        )
        self._session.add(identity)
        await self._session.flush()
        return identity

    async def get(self, identity_id: uuid.UUID) -> Identity | None:
        return await self._session.get(Identity, identity_id)

    async def get_by_email(self, email: str) -> Identity | None:
        stmt = select(Identity).where(Identity.email == email.strip().lower())
        return (await self._session.execute(stmt)).scalar_one_or_none()


# --- Module Notes -----------------------------------------------------------
# Identities have no delete path; a token outliving its identity is still handled
# by the gate (IdentityNotFoundError) in case rows are removed out of band.
