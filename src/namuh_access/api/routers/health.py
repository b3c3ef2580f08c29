"""
namuh_access.api.routers.health

Liveness and readiness probes.

Responsibilities:
- `/healthz`: the process is serving HTTP.
- `/readyz`: the database answers and the session store is open; reports which
  tier authority the service will consult.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from namuh_access.api.deps import db_session
from namuh_access.auth.deps import session_store_from_app, settings_from_app
from namuh_access.auth.session import SessionStore
from namuh_access.settings import Settings

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    session: AsyncSession = Depends(db_session),
    store: SessionStore = Depends(session_store_from_app),
    settings: Settings = Depends(settings_from_app),
) -> dict[str, str]:
    await session.execute(text("SELECT 1"))
    if not store.is_open:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="session store closed")
    return {
        "status": "ready",
        "tier_authority": "remote" if settings.tier_authority_url else "in-process",
    }
