"""
pet_adoption.db.repositories.base

Shared CRUD helpers for the entity repositories.
"""

from __future__ import annotations

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pet_adoption.db.base import RecordMixin, utcnow

ModelT = TypeVar("ModelT", bound=RecordMixin)


class CrudRepo(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, record_id: uuid.UUID) -> ModelT | None:
        return await self._session.get(self.model, record_id)

    async def get_many(self, record_ids: set[uuid.UUID]) -> dict[uuid.UUID, ModelT]:
        if not record_ids:
            return {}
        stmt = select(self.model).where(self.model.id.in_(record_ids))
        rows = (await self._session.execute(stmt)).scalars().all()
        return {row.id: row for row in rows}

    async def create(self, fields: dict[str, Any]) -> ModelT:
        # Unique-constraint violations surface here as IntegrityError.
        obj = self.model(**fields)
        self._session.add(obj)
        await self._session.flush()
        return obj

    async def update(self, obj: ModelT, fields: dict[str, Any]) -> ModelT:
        for key, value in fields.items():
            setattr(obj, key, value)
        obj.updated_at = utcnow()
        await self._session.flush()
        return obj

    async def delete(self, obj: ModelT) -> None:
        await self._session.delete(obj)
        await self._session.flush()
