"""
pet_adoption.errors

Domain error taxonomy.

Responsibilities:
- Define one exception type per failure kind raised by services and auth.
- Carry the HTTP status each kind maps to; translation happens in `api.errors`.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class PetAdoptionError(Exception):
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Unexpected error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PetAdoptionError):
    """Missing or malformed fields; field messages are joined into one string."""

    status_code = HTTP_400_BAD_REQUEST
    default_message = "Invalid request."

    def __init__(self, messages: str | list[str]) -> None:
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))


class InvalidReferenceFormatError(PetAdoptionError):
    status_code = HTTP_400_BAD_REQUEST

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"Invalid {entity} id.")


class DuplicateError(PetAdoptionError):
    status_code = HTTP_400_BAD_REQUEST
    default_message = "Record already exists."


class AuthenticationRequiredError(PetAdoptionError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Not authorized, no token."


class InvalidCredentialsError(PetAdoptionError):
    # Same message for unknown email and wrong password.
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials."


class TokenInvalidError(PetAdoptionError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Not authorized, token invalid."


class IdentityNotFoundError(PetAdoptionError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Not authorized, user not found."


class AuthorizationError(PetAdoptionError):
    status_code = HTTP_403_FORBIDDEN
    default_message = "Not authorized to access this route."


class NotFoundError(PetAdoptionError):
    status_code = HTTP_404_NOT_FOUND

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"{entity.capitalize()} not found.")


class ReferenceNotFoundError(NotFoundError):
    """A well-formed reference that does not resolve to a stored record."""


class InternalError(PetAdoptionError):
    default_message = "Internal server error."


# --- Module Notes -----------------------------------------------------------
# Messages here are user-visible. Never interpolate secrets, hashes, or tokens.
