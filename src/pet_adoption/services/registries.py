"""
pet_adoption.services.registries

Entity registry services (shelters, adopters, animals, adoptions).

Responsibilities:
- CRUD with explicit field validation before every write.
- Referential-integrity checks for Animal -> Shelter and Adoption -> Adopter/Animal.
- Shelter-operator scoping for animal writes.
- Populate referenced records for read views.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

from sqlalchemy.ext.asyncio import AsyncSession

from pet_adoption.auth.models import EntityKind, RequestContext
from pet_adoption.db.models import Adopter, Adoption, Animal, Role, Shelter, Species
from pet_adoption.db.repositories.adopters import AdopterRepo
from pet_adoption.db.repositories.adoptions import AdoptionRepo
from pet_adoption.db.repositories.animals import AnimalRepo
from pet_adoption.db.repositories.shelters import ShelterRepo
from pet_adoption.errors import AuthorizationError, NotFoundError, ValidationError
from pet_adoption.observability.logging import get_logger
from pet_adoption.services.references import ReferenceValidator, parse_record_id, parse_reference
from pet_adoption.services.transactions import committing
from pet_adoption.services.validation import (
    ADOPTER_FIELDS,
    ANIMAL_FIELDS,
    SHELTER_FIELDS,
    ValidationResult,
    validate_adopter,
    validate_adoption_date,
    validate_animal,
    validate_shelter,
)

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AnimalView:
    animal: Animal
    shelter: Shelter | None


@dataclass(frozen=True, slots=True)
class AdoptionView:
    adoption: Adoption
    adopter: Adopter | None
    animal: Animal | None


def _merged(obj: Any, fields: tuple[str, ...], payload: dict[str, Any]) -> dict[str, Any]:
    current = {f: getattr(obj, f) for f in fields}
    current.update({k: v for k, v in payload.items() if k in fields})
    return current


class _ContactRegistry(ABC):
    """Shelters and adopters: flat records with unique contact fields and no references."""

    kind: ClassVar[EntityKind]
    fields: ClassVar[tuple[str, ...]]
    duplicate_message: ClassVar[str]

    def __init__(self, session: AsyncSession, repo: ShelterRepo | AdopterRepo) -> None:
        self._session = session
        self._repo = repo

    @abstractmethod
    def _validate(self, data: dict[str, Any]) -> ValidationResult: ...

    async def list(self) -> list[Any]:
        return await self._repo.list()

    async def get(self, raw_id: str) -> Any:
        record = await self._repo.get(parse_record_id(self.kind, raw_id))
        if record is None:
            raise NotFoundError(self.kind.value)
        return record

    async def create(self, ctx: RequestContext, payload: dict[str, Any]) -> Any:
        fields = self._validate(payload).unwrap()
        async with committing(self._session, duplicate_message=self.duplicate_message):
            record = await self._repo.create(fields)
        log.info(f"{self.kind.value}_created", record_id=str(record.id), actor=str(ctx.identity_id))
        return record

    async def update(self, ctx: RequestContext, raw_id: str, payload: dict[str, Any]) -> Any:
        record = await self.get(raw_id)
        fields = self._validate(_merged(record, self.fields, payload)).unwrap()
        async with committing(self._session, duplicate_message=self.duplicate_message):
            await self._repo.update(record, fields)
        log.info(f"{self.kind.value}_updated", record_id=str(record.id), actor=str(ctx.identity_id))
        return record

    async def delete(self, ctx: RequestContext, raw_id: str) -> None:
        record = await self.get(raw_id)
        async with committing(self._session, duplicate_message=self.duplicate_message):
            await self._repo.delete(record)
        log.info(f"{self.kind.value}_deleted", record_id=str(record.id), actor=str(ctx.identity_id))


class ShelterService(_ContactRegistry):
    kind = EntityKind.shelter
    fields = SHELTER_FIELDS
    duplicate_message = "Shelter name or email already registered."

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, ShelterRepo(session))

    def _validate(self, data: dict[str, Any]) -> ValidationResult:
        return validate_shelter(data)


class AdopterService(_ContactRegistry):
    kind = EntityKind.adopter
    fields = ADOPTER_FIELDS
    duplicate_message = "Adopter email already registered."

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AdopterRepo(session))

    def _validate(self, data: dict[str, Any]) -> ValidationResult:
        return validate_adopter(data)


class AnimalService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._animals = AnimalRepo(session)
        self._shelters = ShelterRepo(session)
        self._refs = ReferenceValidator(session)

    async def list(
        self,
        *,
        species: str | None = None,
        breed: str | None = None,
        age: int | None = None,
        shelter: str | None = None,
    ) -> list[AnimalView]:
        species_value: Species | None = None
        if species:
            try:
                species_value = Species(species)
            except ValueError as e:
                raise ValidationError("Species must be 'dog' or 'cat'.") from e
        shelter_id = parse_reference(EntityKind.shelter, shelter) if shelter else None

        animals = await self._animals.list(
            species=species_value,
            breed=breed or None,
            age=age,
            shelter_owner_id=shelter_id,
        )
        shelters = await self._shelters.get_many({a.shelter_owner_id for a in animals})
        return [AnimalView(animal=a, shelter=shelters.get(a.shelter_owner_id)) for a in animals]

    async def get(self, raw_id: str) -> AnimalView:
        animal = await self._get(raw_id)
        return AnimalView(animal=animal, shelter=await self._shelters.get(animal.shelter_owner_id))

    async def create(self, ctx: RequestContext, payload: dict[str, Any]) -> AnimalView:
        owner_raw = payload.get("shelter_owner_id")
        if owner_raw is None and ctx.role is Role.shelter and ctx.linked is not None:
            # Shelter operators default to their own shelter.
            owner_raw = ctx.linked.entity_id
        if owner_raw is None:
            raise ValidationError("Shelter owner is required.")

        fields = validate_animal(payload).unwrap()
        owner_id = await self._refs.resolve_one(EntityKind.shelter, owner_raw)
        self._check_scope(ctx, owner_id)

        async with committing(self._session, duplicate_message="Animal already exists."):
            animal = await self._animals.create({**fields, "shelter_owner_id": owner_id})
        log.info(
            "animal_created",
            record_id=str(animal.id),
            shelter_id=str(owner_id),
            actor=str(ctx.identity_id),
        )
        return AnimalView(animal=animal, shelter=await self._shelters.get(owner_id))

    async def update(self, ctx: RequestContext, raw_id: str, payload: dict[str, Any]) -> AnimalView:
        animal = await self._get(raw_id)
        self._check_scope(ctx, animal.shelter_owner_id)

        fields = validate_animal(_merged(animal, ANIMAL_FIELDS, payload)).unwrap()
        if "shelter_owner_id" in payload:
            if payload["shelter_owner_id"] is None:
                raise ValidationError("Shelter owner is required.")
            owner_id = await self._refs.resolve_one(EntityKind.shelter, payload["shelter_owner_id"])
            self._check_scope(ctx, owner_id)
            fields["shelter_owner_id"] = owner_id

        async with committing(self._session, duplicate_message="Animal already exists."):
            await self._animals.update(animal, fields)
        log.info("animal_updated", record_id=str(animal.id), actor=str(ctx.identity_id))
        return AnimalView(animal=animal, shelter=await self._shelters.get(animal.shelter_owner_id))

    async def delete(self, ctx: RequestContext, raw_id: str) -> None:
        animal = await self._get(raw_id)
        self._check_scope(ctx, animal.shelter_owner_id)
        async with committing(self._session, duplicate_message="Animal already exists."):
            await self._animals.delete(animal)
        log.info("animal_deleted", record_id=str(animal.id), actor=str(ctx.identity_id))

    async def _get(self, raw_id: str) -> Animal:
        animal = await self._animals.get(parse_record_id(EntityKind.animal, raw_id))
        if animal is None:
            raise NotFoundError(EntityKind.animal.value)
        return animal

    @staticmethod
    def _check_scope(ctx: RequestContext, shelter_id: uuid.UUID) -> None:
        if ctx.role is Role.shelter and not ctx.owns(EntityKind.shelter, shelter_id):
            raise AuthorizationError("Shelter operators can only manage their own shelter's animals.")


class AdoptionService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._adoptions = AdoptionRepo(session)
        self._adopters = AdopterRepo(session)
        self._animals = AnimalRepo(session)
        self._refs = ReferenceValidator(session)

    async def list(self, *, adopter: str | None = None, animal: str | None = None) -> list[AdoptionView]:
        adopter_id = parse_reference(EntityKind.adopter, adopter) if adopter else None
        animal_id = parse_reference(EntityKind.animal, animal) if animal else None

        adoptions = await self._adoptions.list(adopter_id=adopter_id, animal_id=animal_id)
        adopters = await self._adopters.get_many({a.adopter_id for a in adoptions})
        animals = await self._animals.get_many({a.animal_id for a in adoptions})
        return [
            AdoptionView(
                adoption=a,
                adopter=adopters.get(a.adopter_id),
                animal=animals.get(a.animal_id),
            )
            for a in adoptions
        ]

    async def get(self, raw_id: str) -> AdoptionView:
        return await self._view(await self._get(raw_id))

    async def create(self, ctx: RequestContext, payload: dict[str, Any]) -> AdoptionView:
        missing = [
            message
            for key, message in (
                ("adopter_id", "Adopter is required."),
                ("animal_id", "Animal is required."),
            )
            if payload.get(key) is None
        ]
        if missing:
            raise ValidationError(missing)

        fields = validate_adoption_date(payload).unwrap()
        adopter_id, animal_id = await self._refs.resolve(
            (EntityKind.adopter, payload["adopter_id"]),
            (EntityKind.animal, payload["animal_id"]),
        )

        # Same animal may be adopted more than once; no uniqueness is enforced.
        async with committing(self._session, duplicate_message="Adoption already exists."):
            adoption = await self._adoptions.create(
                {**fields, "adopter_id": adopter_id, "animal_id": animal_id}
            )
        log.info(
            "adoption_created",
            record_id=str(adoption.id),
            adopter_id=str(adopter_id),
            animal_id=str(animal_id),
            actor=str(ctx.identity_id),
        )
        return await self._view(adoption)

    async def update(self, ctx: RequestContext, raw_id: str, payload: dict[str, Any]) -> AdoptionView:
        adoption = await self._get(raw_id)
        fields = validate_adoption_date(payload).unwrap()

        refs: list[tuple[EntityKind, Any]] = []
        for key, kind in (("adopter_id", EntityKind.adopter), ("animal_id", EntityKind.animal)):
            if key in payload:
                refs.append((kind, payload[key]))
        resolved = await self._refs.resolve(*refs)
        for (kind, _), ref_id in zip(refs, resolved, strict=True):
            fields[f"{kind.value}_id"] = ref_id

        async with committing(self._session, duplicate_message="Adoption already exists."):
            await self._adoptions.update(adoption, fields)
        log.info("adoption_updated", record_id=str(adoption.id), actor=str(ctx.identity_id))
        return await self._view(adoption)

    async def delete(self, ctx: RequestContext, raw_id: str) -> None:
        adoption = await self._get(raw_id)
        async with committing(self._session, duplicate_message="Adoption already exists."):
            await self._adoptions.delete(adoption)
        log.info("adoption_deleted", record_id=str(adoption.id), actor=str(ctx.identity_id))

    async def _get(self, raw_id: str) -> Adoption:
        adoption = await self._adoptions.get(parse_record_id(EntityKind.adoption, raw_id))
        if adoption is None:
            raise NotFoundError(EntityKind.adoption.value)
        return adoption

    async def _view(self, adoption: Adoption) -> AdoptionView:
        return AdoptionView(
            adoption=adoption,
            adopter=await self._adopters.get(adoption.adopter_id),
            animal=await self._animals.get(adoption.animal_id),
        )


# --- Module Notes -----------------------------------------------------------
# Deletes never cascade: animals of a deleted shelter and adoptions of a deleted
# adopter/animal keep their ids and read back with a null populated record.
