"""
pet_adoption.api.routers.adoptions

Adoption endpoints. Every route requires role=admin.
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
from pet_adoption.auth.models import ADMIN_ONLY, RequestContext
from pet_adoption.db.models import Species
from pet_adoption.services.registries import AdoptionService, AdoptionView

router = APIRouter(prefix="/adoptions", tags=["adoptions"])


class AdoptionWrite(BaseModel):
    adopter_id: str | None = None
    animal_id: str | None = None
    adoption_date: datetime | None = None


class AdopterSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    phone: str


class AnimalSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    species: Species
    breed: str | None


class AdoptionResponse(BaseModel):
    id: uuid.UUID
    adopter_id: uuid.UUID
    animal_id: uuid.UUID
    adoption_date: datetime
    adopter: AdopterSummary | None
    animal: AnimalSummary | None
    created_at: datetime
    updated_at: datetime


def _to_response(view: AdoptionView) -> AdoptionResponse:
    a = view.adoption
    return AdoptionResponse(
        id=a.id,
        adopter_id=a.adopter_id,
        animal_id=a.animal_id,
        adoption_date=a.adoption_date,
        adopter=AdopterSummary.model_validate(view.adopter) if view.adopter else None,
        animal=AnimalSummary.model_validate(view.animal) if view.animal else None,
        created_at=a.created_at,
        updated_at=a.updated_at,
    )


@router.get("", response_model=list[AdoptionResponse])
async def list_adoptions(
    adopter: str | None = None,
    animal: str | None = None,
    _: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> list[AdoptionResponse]:
    views = await AdoptionService(session).list(adopter=adopter, animal=animal)
    return [_to_response(v) for v in views]


@router.get("/{adoption_id}", response_model=AdoptionResponse)
async def get_adoption(
    adoption_id: str,
    _: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> AdoptionResponse:
    return _to_response(await AdoptionService(session).get(adoption_id))


@router.post("", response_model=AdoptionResponse, status_code=HTTP_201_CREATED)
async def create_adoption(
    body: AdoptionWrite,
    ctx: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> AdoptionResponse:
    view = await AdoptionService(session).create(ctx, body.model_dump(exclude_unset=True))
    return _to_response(view)


@router.put("/{adoption_id}", response_model=AdoptionResponse)
async def update_adoption(
    adoption_id: str,
    body: AdoptionWrite,
    ctx: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> AdoptionResponse:
    view = await AdoptionService(session).update(
        ctx, adoption_id, body.model_dump(exclude_unset=True)
    )
    return _to_response(view)


@router.delete("/{adoption_id}")
async def delete_adoption(
    adoption_id: str,
    ctx: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> dict[str, str]:
    await AdoptionService(session).delete(ctx, adoption_id)
    return {"message": "Adoption deleted."}
