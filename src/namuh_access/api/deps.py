"""
namuh_access.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings and DB sessions.
- Provide the HTTP client used to reach the tier authority.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from namuh_access.auth.deps import settings_from_app
from namuh_access.settings import Settings


def settings_dep(settings: Settings = Depends(settings_from_app)) -> Settings:
    return settings


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session; handlers commit explicitly.
    async with session_factory() as session:
        yield session


async def tier_authority_http(
    request: Request,
    settings: Settings = Depends(settings_dep),
) -> AsyncIterator[httpx.AsyncClient]:
    timeout = httpx.Timeout(settings.tier_authority_timeout_seconds)
    if settings.tier_authority_url:
        async with httpx.AsyncClient(base_url=settings.tier_authority_url, timeout=timeout) as http:
            yield http
        return

    # No remote authority configured: call the reference authority in-process (no network).
    transport = httpx.ASGITransport(app=request.app)
    async with httpx.AsyncClient(
        transport=transport,
        base_url=str(request.base_url).rstrip("/"),
        timeout=timeout,
    ) as http:
        yield http


# --- Module Notes -----------------------------------------------------------
# Swapping the in-process authority for a real one is a settings change only.
