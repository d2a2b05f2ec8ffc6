"""
pet_adoption.api.routers.health

Liveness (`/healthz`) and readiness (`/readyz`) probes. Both are public.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from pet_adoption import __version__
from pet_adoption.api.deps import db_session, settings_dep
from pet_adoption.settings import Settings

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name, "version": __version__}


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> dict[str, str]:
    # Ready once the store answers a trivial query.
    await session.execute(text("SELECT 1"))
    return {"status": "ready"}
