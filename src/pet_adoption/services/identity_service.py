"""
pet_adoption.services.identity_service

Identity lifecycle service (registration, login, session tokens).

Responsibilities:
- Register identities, linking or creating the Shelter/Adopter behind them.
- Authenticate email + password against the stored bcrypt hash.
- Issue session tokens and resolve them back into a `RequestContext`.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from pet_adoption.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate, issue_token
from pet_adoption.auth.models import LINKED_KIND_BY_ROLE, EntityKind, LinkedEntity, RequestContext
from pet_adoption.auth.passwords import hash_password, verify_password
from pet_adoption.db.models import Identity, Role
from pet_adoption.db.repositories.adopters import AdopterRepo
from pet_adoption.db.repositories.identities import IdentityRepo
from pet_adoption.db.repositories.shelters import ShelterRepo
from pet_adoption.errors import (
    DuplicateError,
    IdentityNotFoundError,
    InvalidCredentialsError,
    TokenInvalidError,
    ValidationError,
)
from pet_adoption.observability.logging import get_logger
from pet_adoption.services.references import ReferenceValidator
from pet_adoption.services.transactions import committing
from pet_adoption.services.validation import validate_adopter, validate_credentials, validate_shelter
from pet_adoption.settings import Settings

log = get_logger(__name__)

ENTITY_FIELDS = ("name", "address", "phone")


@dataclass(frozen=True, slots=True)
class AuthResult:
    token: str
    identity: Identity


class IdentityService:
    def __init__(self, *, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._jwt = JwtConfig.from_settings(settings)

        self._identities = IdentityRepo(session)
        self._shelters = ShelterRepo(session)
        self._adopters = AdopterRepo(session)
        self._refs = ReferenceValidator(session)

    async def register(
        self,
        *,
        email: str | None,
        password: str | None,
        role: str | None,
        entity_id: Any = None,
        entity_fields: dict[str, Any] | None = None,
    ) -> AuthResult:
        creds = validate_credentials({"email": email, "password": password, "role": role}).unwrap()
        email_norm: str = creds["email"]
        role_value: Role = creds["role"]
        fields = {k: v for k, v in (entity_fields or {}).items() if k in ENTITY_FIELDS and v is not None}

        if await self._identities.get_by_email(email_norm) is not None:
            raise DuplicateError("Email already registered.")

        kind = LINKED_KIND_BY_ROLE.get(role_value)
        linked_id: uuid.UUID | None = None
        new_entity: dict[str, Any] | None = None
        duplicate = "Email already registered."

        if kind is None:
            if entity_id is not None or fields:
                raise ValidationError("Admin identities cannot be linked to a shelter or adopter.")
        elif entity_id is not None and fields:
            raise ValidationError(f"Provide either entity_id or {kind.value} details, not both.")
        elif entity_id is not None:
            linked_id = await self._refs.resolve_one(kind, entity_id)
        elif fields:
            validate = validate_shelter if kind is EntityKind.shelter else validate_adopter
            new_entity = validate({**fields, "email": email_norm}).unwrap()
            duplicate = f"Email or {kind.value} name already registered."
        else:
            raise ValidationError(
                f"Role '{role_value.value}' requires an entity_id or {kind.value} details "
                "(name, address, phone)."
            )

        password_hash = await run_in_threadpool(
            hash_password, creds["password"], rounds=self._settings.bcrypt_rounds
        )

        async with committing(self._session, duplicate_message=duplicate):
            if new_entity is not None:
                repo = self._shelters if kind is EntityKind.shelter else self._adopters
                entity = await repo.create(new_entity)
                linked_id = entity.id
            identity = await self._identities.create(
                email=email_norm,
                password_hash=password_hash,
                role=role_value,
                entity_id=linked_id,
            )

        log.info(
            "identity_registered",
            identity_id=str(identity.id),
            role=identity.role.value,
            entity_id=str(linked_id) if linked_id else None,
            entity_created=new_entity is not None,
        )
        return AuthResult(token=self.issue_token(identity), identity=identity)

    async def authenticate(self, *, email: str | None, password: str | None) -> AuthResult:
        if not email or not password:
            raise ValidationError("Please provide email and password.")

        identity = await self._identities.get_by_email(email)
        if identity is None:
            log.info("login_failed", reason="unknown_email")
            raise InvalidCredentialsError()
        matches = await run_in_threadpool(verify_password, password, identity.password_hash)
        if not matches:
            log.info("login_failed", reason="bad_password", identity_id=str(identity.id))
            raise InvalidCredentialsError()

        log.info("login_succeeded", identity_id=str(identity.id), role=identity.role.value)
        return AuthResult(token=self.issue_token(identity), identity=identity)

    def issue_token(self, identity: Identity) -> str:
        return issue_token(
            cfg=self._jwt,
            subject=str(identity.id),
            role=identity.role.value,
            entity_id=str(identity.entity_id) if identity.entity_id else None,
        )

    async def resolve_token(self, token: str) -> RequestContext:
        try:
            payload = decode_and_validate(cfg=self._jwt, token=token)
            identity_id = uuid.UUID(str(payload["sub"]))
        except (JwtValidationError, ValueError) as e:
            log.info("token_rejected", error=str(e))
            raise TokenInvalidError() from e

        identity = await self._identities.get(identity_id)
        if identity is None:
            raise IdentityNotFoundError()

        # The stored identity is authoritative; the role claim is informational.
        return RequestContext(
            identity_id=identity.id,
            email=identity.email,
            role=identity.role,
            linked=LinkedEntity.for_role(identity.role, identity.entity_id),
        )

    async def me(self, ctx: RequestContext) -> Identity:
        identity = await self._identities.get(ctx.identity_id)
        if identity is None:
            raise IdentityNotFoundError()
        return identity


# --- Module Notes -----------------------------------------------------------
# Registration with entity details creates the Shelter/Adopter and the Identity
# inside one transaction, so a duplicate on either side leaves nothing behind.
