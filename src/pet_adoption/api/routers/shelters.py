"""
pet_adoption.api.routers.shelters

Shelter registry endpoints. Reads are public; writes require role=admin.
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
from pet_adoption.services.registries import ShelterService

router = APIRouter(prefix="/shelters", tags=["shelters"])


class ShelterWrite(BaseModel):
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None


class ShelterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    address: str
    phone: str
    email: str
    created_at: datetime
    updated_at: datetime


@router.get("", response_model=list[ShelterResponse])
async def list_shelters(session: AsyncSession = Depends(db_session)) -> list[ShelterResponse]:
    shelters = await ShelterService(session).list()
    return [ShelterResponse.model_validate(s) for s in shelters]


@router.get("/{shelter_id}", response_model=ShelterResponse)
async def get_shelter(
    shelter_id: str, session: AsyncSession = Depends(db_session)
) -> ShelterResponse:
    return ShelterResponse.model_validate(await ShelterService(session).get(shelter_id))


@router.post("", response_model=ShelterResponse, status_code=HTTP_201_CREATED)
async def create_shelter(
    body: ShelterWrite,
    ctx: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> ShelterResponse:
    shelter = await ShelterService(session).create(ctx, body.model_dump(exclude_unset=True))
    return ShelterResponse.model_validate(shelter)


@router.put("/{shelter_id}", response_model=ShelterResponse)
async def update_shelter(
    shelter_id: str,
    body: ShelterWrite,
    ctx: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> ShelterResponse:
    shelter = await ShelterService(session).update(
        ctx, shelter_id, body.model_dump(exclude_unset=True)
    )
    return ShelterResponse.model_validate(shelter)


@router.delete("/{shelter_id}")
async def delete_shelter(
    shelter_id: str,
    ctx: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> dict[str, str]:
    # Animals owned by this shelter are left in place.
    await ShelterService(session).delete(ctx, shelter_id)
    return {"message": "Shelter deleted."}
