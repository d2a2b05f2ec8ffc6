"""
pet_adoption.db.repositories.adopters

Repository for `Adopter` entities.

Responsibilities:
- CRUD for adopters.
- Listing ordered by name.
"""

from __future__ import annotations

from sqlalchemy import select

from pet_adoption.db.models import Adopter
from pet_adoption.db.repositories.base import CrudRepo


class AdopterRepo(CrudRepo[Adopter]):
    model = Adopter

    async def list(self) -> list[Adopter]:
        stmt = select(Adopter).order_by(Adopter.name)
        return list((await self._session.execute(stmt)).scalars().all())
