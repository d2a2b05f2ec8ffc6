"""
pet_adoption.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated request context injected into handlers.
- Model the identity -> entity link as a tagged union keyed by entity kind.
- Hold the static per-route role policy.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass

from pet_adoption.db.models import Role


class EntityKind(enum.StrEnum):
    shelter = "shelter"
    adopter = "adopter"
    animal = "animal"
    adoption = "adoption"


# Which registry an identity's entity_id points into, per role.
LINKED_KIND_BY_ROLE: dict[Role, EntityKind] = {
    Role.shelter: EntityKind.shelter,
    Role.adopter: EntityKind.adopter,
}


@dataclass(frozen=True, slots=True)
class LinkedEntity:
    kind: EntityKind
    entity_id: uuid.UUID

    @classmethod
    def for_role(cls, role: Role, entity_id: uuid.UUID | None) -> LinkedEntity | None:
        kind = LINKED_KIND_BY_ROLE.get(role)
        if kind is None or entity_id is None:
            return None
        return cls(kind=kind, entity_id=entity_id)


@dataclass(frozen=True, slots=True)
class RequestContext:
    """
    Authenticated caller, resolved from a session token by the gate and passed
    explicitly to services.
    """

    identity_id: uuid.UUID
    email: str
    role: Role
    linked: LinkedEntity | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.admin

    def owns(self, kind: EntityKind, entity_id: uuid.UUID) -> bool:
        return self.linked is not None and self.linked == LinkedEntity(kind, entity_id)


# Static route policy. Reads of shelters/adopters/animals are public.
ADMIN_ONLY: tuple[Role, ...] = (Role.admin,)
ANIMAL_WRITERS: tuple[Role, ...] = (Role.shelter, Role.admin)
ANY_ROLE: tuple[Role, ...] = tuple(Role)
