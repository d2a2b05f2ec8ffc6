"""
pet_adoption.db.repositories.adoptions

Repository for `Adoption` records.

Responsibilities:
- CRUD for adoptions.
- Filtered listing by adopter and animal, newest adoption first.
"""

from __future__ import annotations

import uuid

from sqlalchemy import desc, select

from pet_adoption.db.models import Adoption
from pet_adoption.db.repositories.base import CrudRepo


class AdoptionRepo(CrudRepo[Adoption]):
    model = Adoption

    async def list(
        self,
        *,
        adopter_id: uuid.UUID | None = None,
        animal_id: uuid.UUID | None = None,
    ) -> list[Adoption]:
        stmt = select(Adoption)
        if adopter_id is not None:
            stmt = stmt.where(Adoption.adopter_id == adopter_id)
        if animal_id is not None:
            stmt = stmt.where(Adoption.animal_id == animal_id)
        # Newest first, matching the admin area's default ordering.
        stmt = stmt.order_by(desc(Adoption.adoption_date))
        return list((await self._session.execute(stmt)).scalars().all())
