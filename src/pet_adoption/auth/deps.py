"""
pet_adoption.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `RequestContext`.
- Enforce per-route role sets via reusable dependency factories.
"""

from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from pet_adoption.api.deps import db_session, settings_dep
from pet_adoption.auth.models import RequestContext
from pet_adoption.db.models import Role
from pet_adoption.errors import AuthenticationRequiredError, AuthorizationError
from pet_adoption.services.identity_service import IdentityService
from pet_adoption.settings import Settings

# auto_error=False so a missing header maps onto our own 401 message.
_bearer = HTTPBearer(auto_error=False)


async def get_request_context(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> RequestContext:
    if creds is None or not creds.credentials:
        raise AuthenticationRequiredError()
    return await IdentityService(session=session, settings=settings).resolve_token(
        creds.credentials
    )


def require_roles(*allowed: Role):
    allowed_set = frozenset(allowed)

    async def _dep(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
        if ctx.role not in allowed_set:
            raise AuthorizationError(
                f"Role '{ctx.role.value}' is not authorized to access this route."
            )
        return ctx

    return _dep


# --- Module Notes -----------------------------------------------------------
# Handlers take the returned RequestContext as a parameter and hand it to services;
# nothing is stashed on the request object.
