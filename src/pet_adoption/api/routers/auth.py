"""
pet_adoption.api.routers.auth

Identity endpoints: registration, login and the current-identity view.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_201_CREATED

from pet_adoption.api.deps import db_session, settings_dep
from pet_adoption.auth.deps import require_roles
from pet_adoption.auth.models import ANY_ROLE, RequestContext
from pet_adoption.db.models import Identity, Role
from pet_adoption.services.identity_service import AuthResult, IdentityService
from pet_adoption.settings import Settings

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    role: str | None = None
    # Either link an existing shelter/adopter...
    entity_id: str | None = None
    # ...or create one from these fields.
    name: str | None = None
    address: str | None = None
    phone: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: uuid.UUID
    email: str
    role: Role
    entity_id: uuid.UUID | None = None


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


class MeResponse(BaseModel):
    user: UserResponse


def _user(identity: Identity) -> UserResponse:
    # Explicit field copy: the password hash never reaches a response model.
    return UserResponse(
        id=identity.id,
        email=identity.email,
        role=identity.role,
        entity_id=identity.entity_id,
    )


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(token=result.token, user=_user(result.identity))


@router.post(
    "/register",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    status_code=HTTP_201_CREATED,
)
async def register(
    body: RegisterRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthResponse:
    result = await IdentityService(session=session, settings=settings).register(
        email=body.email,
        password=body.password,
        role=body.role,
        entity_id=body.entity_id,
        entity_fields={"name": body.name, "address": body.address, "phone": body.phone},
    )
    return _auth_response(result)


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
async def login(
    body: LoginRequest,
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthResponse:
    result = await IdentityService(session=session, settings=settings).authenticate(
        email=body.email, password=body.password
    )
    return _auth_response(result)


@router.get("/me", response_model=MeResponse, response_model_exclude_none=True)
async def me(
    ctx: RequestContext = Depends(require_roles(*ANY_ROLE)),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> MeResponse:
    identity = await IdentityService(session=session, settings=settings).me(ctx)
    return MeResponse(user=_user(identity))
