"""
pet_adoption.db.models

Core persistence schema.

Responsibilities:
- Define ORM models for the credential store and the four entity registries:
  - Identity: login principal (email, password hash, role, linked entity)
  - Shelter / Adopter: business entities an identity may be linked to
  - Animal: owned by a shelter
  - Adoption: links an adopter to an animal
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Enum, Integer, String, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from pet_adoption.db.base import Base, RecordMixin, utcnow


class Role(enum.StrEnum):
    admin = "admin"
    shelter = "shelter"
    adopter = "adopter"


class Species(enum.StrEnum):
    dog = "dog"
    cat = "cat"


class Sex(enum.StrEnum):
    male = "male"
    female = "female"


class Identity(RecordMixin, Base):
    __tablename__ = "identities"

    # Lower-cased before insert, so the unique index is case-insensitive in practice.
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[Role] = mapped_column(Enum(Role), nullable=False, index=True)
    # Points at a Shelter or an Adopter depending on `role`; null for admins.
    entity_id: Mapped[uuid.UUID | None] = mapped_column(SAUuid(as_uuid=True), nullable=True)


class Shelter(RecordMixin, Base):
    __tablename__ = "shelters"

    name: Mapped[str] = mapped_column(String(256), nullable=False, unique=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)


class Adopter(RecordMixin, Base):
    __tablename__ = "adopters"

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)


class Animal(RecordMixin, Base):
    __tablename__ = "animals"

    name: Mapped[str] = mapped_column(String(256), nullable=False)
    species: Mapped[Species] = mapped_column(Enum(Species), nullable=False, index=True)
    breed: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    sex: Mapped[Sex] = mapped_column(Enum(Sex), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    photos: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    # No FK constraint: deleting a shelter leaves its animals in place.
    shelter_owner_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), nullable=False, index=True
    )


class Adoption(RecordMixin, Base):
    __tablename__ = "adoptions"

    adopter_id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), nullable=False, index=True)
    animal_id: Mapped[uuid.UUID] = mapped_column(SAUuid(as_uuid=True), nullable=False, index=True)
    adoption_date: Mapped[datetime] = mapped_column(nullable=False, default=utcnow)


# --- Module Notes -----------------------------------------------------------
# Cross-record references are plain indexed UUID columns. Existence is checked by
# `services.references` at write time; deletes never cascade.
