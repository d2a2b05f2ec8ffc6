"""
pet_adoption.services.validation

Explicit field validation, run before every write.

Responsibilities:
- Normalize (trim / lower-case) and check the fields of each record type.
- Collect every field-level message and return them as a `ValidationResult`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from pet_adoption.db.models import Role, Sex, Species
from pet_adoption.errors import ValidationError

PHONE_RE = re.compile(r"^\(\d{2}\)\s?\d{4,5}-\d{4}$")
EMAIL_RE = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")
PHOTO_URL_RE = re.compile(
    r"^https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"(?:[-a-zA-Z0-9()@:%_+.~#?&/=]*)$"
)

PASSWORD_MIN_LENGTH = 6
# bcrypt only reads the first 72 bytes; longer secrets would match on their prefix.
PASSWORD_MAX_BYTES = 72
DESCRIPTION_MIN_LENGTH = 10

PHONE_MESSAGE = "Invalid phone format. Use (XX) XXXX-XXXX or (XX) XXXXX-XXXX."

SHELTER_FIELDS = ("name", "address", "phone", "email")
ADOPTER_FIELDS = ("name", "email", "phone", "address")
ANIMAL_FIELDS = ("name", "species", "breed", "age", "sex", "description", "photos")


@dataclass(frozen=True, slots=True)
class ValidationResult:
    value: dict[str, Any]
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> dict[str, Any]:
        if self.errors:
            raise ValidationError(list(self.errors))
        return self.value


class _Checker:
    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data
        self.value: dict[str, Any] = {}
        self.errors: list[str] = []

    def result(self) -> ValidationResult:
        return ValidationResult(value=self.value, errors=tuple(self.errors))

    def text(
        self,
        key: str,
        required: str | None,
        *,
        pattern: re.Pattern[str] | None = None,
        pattern_message: str = "",
        min_length: int | None = None,
        min_length_message: str = "",
        lower: bool = False,
    ) -> None:
        raw = self._data.get(key)
        if raw is not None and not isinstance(raw, str):
            self.errors.append(f"Field '{key}' must be a string.")
            return
        text = (raw or "").strip()
        if lower:
            text = text.lower()
        if not text:
            if required:
                self.errors.append(required)
            else:
                self.value[key] = None
            return
        if pattern is not None and not pattern.match(text):
            self.errors.append(pattern_message)
            return
        if min_length is not None and len(text) < min_length:
            self.errors.append(min_length_message)
            return
        self.value[key] = text

    def choice(self, key: str, enum_type: type, required: str, invalid: str) -> None:
        raw = self._data.get(key)
        if raw is None or raw == "":
            self.errors.append(required)
            return
        try:
            self.value[key] = enum_type(raw)
        except ValueError:
            self.errors.append(invalid)

    def email(self, key: str, required: str) -> None:
        self.text(key, required, pattern=EMAIL_RE, pattern_message="Invalid email format.", lower=True)

    def phone(self, key: str, required: str) -> None:
        self.text(key, required, pattern=PHONE_RE, pattern_message=PHONE_MESSAGE)


def validate_shelter(data: dict[str, Any]) -> ValidationResult:
    c = _Checker(data)
    c.text("name", "Shelter name is required.")
    c.text("address", "Address is required.")
    c.phone("phone", "Phone is required.")
    c.email("email", "Email is required.")
    return c.result()


def validate_adopter(data: dict[str, Any]) -> ValidationResult:
    c = _Checker(data)
    c.text("name", "Adopter name is required.")
    c.email("email", "Adopter email is required.")
    c.phone("phone", "Adopter phone is required.")
    c.text("address", "Adopter address is required.")
    return c.result()


def validate_animal(data: dict[str, Any]) -> ValidationResult:
    c = _Checker(data)
    c.text("name", "Animal name is required.")
    c.choice("species", Species, "Species is required.", "Species must be 'dog' or 'cat'.")
    c.text("breed", None)
    c.choice("sex", Sex, "Sex is required.", "Sex must be 'male' or 'female'.")
    c.text(
        "description",
        "Description is required.",
        min_length=DESCRIPTION_MIN_LENGTH,
        min_length_message=f"Description must have at least {DESCRIPTION_MIN_LENGTH} characters.",
    )

    age = data.get("age")
    if age is None:
        c.errors.append("Age is required.")
    elif isinstance(age, bool) or not isinstance(age, int):
        c.errors.append("Age must be an integer.")
    elif age < 0:
        c.errors.append("Age cannot be negative.")
    else:
        c.value["age"] = age

    photos = data.get("photos")
    if not photos:
        c.errors.append("At least one photo is required.")
    elif not isinstance(photos, list) or not all(isinstance(p, str) for p in photos):
        c.errors.append("Photos must be a list of URLs.")
    else:
        cleaned = [p.strip() for p in photos]
        if not all(PHOTO_URL_RE.match(p) for p in cleaned):
            c.errors.append("Invalid photo URL format.")
        else:
            c.value["photos"] = cleaned
    return c.result()


def validate_adoption_date(data: dict[str, Any]) -> ValidationResult:
    if "adoption_date" not in data:
        return ValidationResult(value={})
    value = data["adoption_date"]
    if not isinstance(value, datetime):
        return ValidationResult(value={}, errors=("Adoption date is required.",))
    # Stored as naive UTC like every other timestamp.
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return ValidationResult(value={"adoption_date": value})


def validate_credentials(data: dict[str, Any]) -> ValidationResult:
    c = _Checker(data)
    c.email("email", "Email is required.")
    c.choice(
        "role",
        Role,
        "Role is required.",
        "Invalid role. Use 'admin', 'shelter' or 'adopter'.",
    )
    password = data.get("password")
    if not password:
        c.errors.append("Password is required.")
    elif not isinstance(password, str):
        c.errors.append("Password must be a string.")
    elif len(password) < PASSWORD_MIN_LENGTH:
        c.errors.append(f"Password must have at least {PASSWORD_MIN_LENGTH} characters.")
    elif len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        c.errors.append(f"Password must be at most {PASSWORD_MAX_BYTES} bytes.")
    else:
        # Passwords are taken verbatim; trimming would change the secret.
        c.value["password"] = password
    return c.result()


# --- Module Notes -----------------------------------------------------------
# Updates validate the merged record (stored values overlaid with the payload),
# so a PUT re-runs the same constraints as a create.
