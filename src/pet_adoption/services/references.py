"""
pet_adoption.services.references

Referential-integrity validator.

Responsibilities:
- Check that a reference is a well-formed id before touching the store.
- Check that a well-formed reference resolves to an existing record.
- Fail fast, in the caller's order, when several references are supplied.
"""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from pet_adoption.auth.models import EntityKind
from pet_adoption.db.base import Base
from pet_adoption.db.models import Adopter, Adoption, Animal, Shelter
from pet_adoption.errors import InvalidReferenceFormatError, ReferenceNotFoundError, ValidationError

MODEL_BY_KIND: dict[EntityKind, type[Base]] = {
    EntityKind.shelter: Shelter,
    EntityKind.adopter: Adopter,
    EntityKind.animal: Animal,
    EntityKind.adoption: Adoption,
}


def _parse_uuid(raw: Any) -> uuid.UUID | None:
    if isinstance(raw, uuid.UUID):
        return raw
    if not isinstance(raw, str):
        return None
    try:
        return uuid.UUID(raw.strip())
    except ValueError:
        return None


def parse_reference(kind: EntityKind, raw: Any) -> uuid.UUID:
    ref_id = _parse_uuid(raw)
    if ref_id is None:
        raise InvalidReferenceFormatError(kind.value)
    return ref_id


def parse_record_id(kind: EntityKind, raw: Any) -> uuid.UUID:
    """Path ids of the record being read/updated/deleted (not a reference)."""
    record_id = _parse_uuid(raw)
    if record_id is None:
        raise ValidationError(f"Invalid {kind.value} id.")
    return record_id


class ReferenceValidator:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def resolve(self, *refs: tuple[EntityKind, Any]) -> list[uuid.UUID]:
        # Every structural check runs before the first lookup.
        ids = [parse_reference(kind, raw) for kind, raw in refs]
        for (kind, _), ref_id in zip(refs, ids, strict=True):
            if await self._session.get(MODEL_BY_KIND[kind], ref_id) is None:
                raise ReferenceNotFoundError(kind.value)
        return ids

    async def resolve_one(self, kind: EntityKind, raw: Any) -> uuid.UUID:
        (ref_id,) = await self.resolve((kind, raw))
        return ref_id


# --- Module Notes -----------------------------------------------------------
# Existence is checked at write time only. Later deletes can still leave dangling
# references, since no delete path cascades.
