"""
pet_adoption.api.routers.adopters

Adopter registry endpoints. Reads are public; writes require role=admin.
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
from pet_adoption.services.registries import AdopterService

router = APIRouter(prefix="/adopters", tags=["adopters"])


class AdopterWrite(BaseModel):
    name: str | None = None
    address: str | None = None
    phone: str | None = None
    email: str | None = None


class AdopterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    address: str
    phone: str
    email: str
    created_at: datetime
    updated_at: datetime


@router.get("", response_model=list[AdopterResponse])
async def list_adopters(session: AsyncSession = Depends(db_session)) -> list[AdopterResponse]:
    adopters = await AdopterService(session).list()
    return [AdopterResponse.model_validate(a) for a in adopters]


@router.get("/{adopter_id}", response_model=AdopterResponse)
async def get_adopter(
    adopter_id: str, session: AsyncSession = Depends(db_session)
) -> AdopterResponse:
    return AdopterResponse.model_validate(await AdopterService(session).get(adopter_id))


@router.post("", response_model=AdopterResponse, status_code=HTTP_201_CREATED)
async def create_adopter(
    body: AdopterWrite,
    ctx: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> AdopterResponse:
    adopter = await AdopterService(session).create(ctx, body.model_dump(exclude_unset=True))
    return AdopterResponse.model_validate(adopter)


@router.put("/{adopter_id}", response_model=AdopterResponse)
async def update_adopter(
    adopter_id: str,
    body: AdopterWrite,
    ctx: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> AdopterResponse:
    adopter = await AdopterService(session).update(
        ctx, adopter_id, body.model_dump(exclude_unset=True)
    )
    return AdopterResponse.model_validate(adopter)


@router.delete("/{adopter_id}")
async def delete_adopter(
    adopter_id: str,
    ctx: RequestContext = Depends(require_roles(*ADMIN_ONLY)),
    session: AsyncSession = Depends(db_session),
) -> dict[str, str]:
    # Adoptions referencing this adopter are left in place.
    await AdopterService(session).delete(ctx, adopter_id)
    return {"message": "Adopter deleted."}
