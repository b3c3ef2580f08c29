"""
namuh_access.api.routers.internal.router

Internal router aggregator.

Responsibilities:
- Mount internal routers under `/internal/v1`, all requiring a service token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from namuh_access.api.routers.internal import subscriptions
from namuh_access.auth.deps import require_internal_system

router = APIRouter(
    prefix="/internal/v1",
    tags=["internal"],
    dependencies=[Depends(require_internal_system)],
)

router.include_router(subscriptions.router, prefix="/subscriptions")
