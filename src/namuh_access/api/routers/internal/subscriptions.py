"""
namuh_access.api.routers.internal.subscriptions

Reference tier authority.

Responsibilities:
- Answer "is this user entitled to this tier or higher?" from the subscriptions table.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from namuh_access.api.deps import db_session
from namuh_access.db.models import SubscriptionStatus
from namuh_access.db.repositories.subscriptions import SubscriptionRepo
from namuh_access.observability.logging import get_logger
from namuh_access.tiers.models import SubscriptionTier

router = APIRouter()
log = get_logger(__name__)


class CheckAccessRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=256)
    required_tier: str = Field(min_length=1, max_length=64)


class CheckAccessResponse(BaseModel):
    has_access: bool


@router.post("/check-access", response_model=CheckAccessResponse)
async def check_access(
    body: CheckAccessRequest,
    session: AsyncSession = Depends(db_session),
) -> CheckAccessResponse:
    try:
        required = SubscriptionTier.parse(body.required_tier)
    except ValueError:
        return CheckAccessResponse(has_access=False)

    sub = await SubscriptionRepo(session).get(body.user_id)
    if sub is None or sub.status != SubscriptionStatus.active:
        return CheckAccessResponse(has_access=False)

    try:
        held = SubscriptionTier.parse(sub.tier_name)
    except ValueError:
        log.warning("subscription_tier_unparseable", user_id=body.user_id, tier_name=sub.tier_name)
        return CheckAccessResponse(has_access=False)

    return CheckAccessResponse(has_access=held.covers(required))


# --- Module Notes -----------------------------------------------------------
# Read-only and idempotent: repeated calls with the same arguments return the
# same answer until the subscription row changes.
