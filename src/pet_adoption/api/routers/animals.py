"""
pet_adoption.api.routers.animals

Animal registry endpoints.

Responsibilities:
- Public listing (filterable by species, breed, age, shelter) and detail reads.
- Writes for role=shelter (own shelter only) and role=admin.
- Embed the owning shelter's contact summary in every animal view.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from pet_adoption.api.deps import db_session
from pet_adoption.auth.deps import require_roles
from pet_adoption.auth.models import ANIMAL_WRITERS, RequestContext
from pet_adoption.db.models import Sex, Species
from pet_adoption.services.registries import AnimalService, AnimalView

router = APIRouter(prefix="/animals", tags=["animals"])


class AnimalWrite(BaseModel):
    name: str | None = None
    species: str | None = None
    breed: str | None = None
    age: int | None = None
    sex: str | None = None
    description: str | None = None
    photos: list[str] | None = None
    shelter_owner_id: str | None = None


class ShelterSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    phone: str
    address: str


class AnimalResponse(BaseModel):
    id: uuid.UUID
    name: str
    species: Species
    breed: str | None
    age: int
    sex: Sex
    description: str
    photos: list[str]
    shelter_owner_id: uuid.UUID
    # Null when the owning shelter has since been deleted.
    shelter: ShelterSummary | None
    created_at: datetime
    updated_at: datetime


def _to_response(view: AnimalView) -> AnimalResponse:
    a = view.animal
    return AnimalResponse(
        id=a.id,
        name=a.name,
        species=a.species,
        breed=a.breed,
        age=a.age,
        sex=a.sex,
        description=a.description,
        photos=list(a.photos),
        shelter_owner_id=a.shelter_owner_id,
        shelter=ShelterSummary.model_validate(view.shelter) if view.shelter else None,
        created_at=a.created_at,
        updated_at=a.updated_at,
    )


@router.get("", response_model=list[AnimalResponse])
async def list_animals(
    species: str | None = None,
    breed: str | None = None,
    age: int | None = None,
    shelter: str | None = None,
    session: AsyncSession = Depends(db_session),
) -> list[AnimalResponse]:
    views = await AnimalService(session).list(
        species=species, breed=breed, age=age, shelter=shelter
    )
    return [_to_response(v) for v in views]


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal(animal_id: str, session: AsyncSession = Depends(db_session)) -> AnimalResponse:
    return _to_response(await AnimalService(session).get(animal_id))


@router.post("", response_model=AnimalResponse, status_code=HTTP_201_CREATED)
async def create_animal(
    body: AnimalWrite,
    ctx: RequestContext = Depends(require_roles(*ANIMAL_WRITERS)),
    session: AsyncSession = Depends(db_session),
) -> AnimalResponse:
    view = await AnimalService(session).create(ctx, body.model_dump(exclude_unset=True))
    return _to_response(view)


@router.put("/{animal_id}", response_model=AnimalResponse)
async def update_animal(
    animal_id: str,
    body: AnimalWrite,
    ctx: RequestContext = Depends(require_roles(*ANIMAL_WRITERS)),
    session: AsyncSession = Depends(db_session),
) -> AnimalResponse:
    view = await AnimalService(session).update(ctx, animal_id, body.model_dump(exclude_unset=True))
    return _to_response(view)


@router.delete("/{animal_id}")
async def delete_animal(
    animal_id: str,
    ctx: RequestContext = Depends(require_roles(*ANIMAL_WRITERS)),
    session: AsyncSession = Depends(db_session),
) -> dict[str, str]:
    await AnimalService(session).delete(ctx, animal_id)
    return {"message": "Animal deleted."}
