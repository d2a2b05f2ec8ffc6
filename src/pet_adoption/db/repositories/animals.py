"""
pet_adoption.db.repositories.animals

Repository for `Animal` entities.

Responsibilities:
- CRUD for animals.
- Filtered listing by species, breed, age and owning shelter.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select

from pet_adoption.db.models import Animal, Species
from pet_adoption.db.repositories.base import CrudRepo


class AnimalRepo(CrudRepo[Animal]):
    model = Animal

    async def list(
        self,
        *,
        species: Species | None = None,
        breed: str | None = None,
        age: int | None = None,
        shelter_owner_id: uuid.UUID | None = None,
    ) -> list[Animal]:
        stmt = select(Animal)
        if species is not None:
            stmt = stmt.where(Animal.species == species)
        if breed is not None:
            stmt = stmt.where(Animal.breed == breed)
        if age is not None:
            stmt = stmt.where(Animal.age == age)
        if shelter_owner_id is not None:
            stmt = stmt.where(Animal.shelter_owner_id == shelter_owner_id)
        stmt = stmt.order_by(Animal.created_at)
        return list((await self._session.execute(stmt)).scalars().all())
