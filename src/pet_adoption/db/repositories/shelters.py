"""
pet_adoption.db.repositories.shelters

Repository for `Shelter` entities.

Responsibilities:
- CRUD for shelters.
- Listing ordered by name.
"""

from __future__ import annotations

from sqlalchemy import select

from pet_adoption.db.models import Shelter
from pet_adoption.db.repositories.base import CrudRepo


class ShelterRepo(CrudRepo[Shelter]):
    model = Shelter

    async def list(self) -> list[Shelter]:
        stmt = select(Shelter).order_by(Shelter.name)
        return list((await self._session.execute(stmt)).scalars().all())
