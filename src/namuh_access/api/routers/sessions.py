"""
namuh_access.api.routers.sessions

Session endpoints for the bearer's own session.

Responsibilities:
- Report the restored user together with their subscription (tier, status,
  token balance), as the web client loads it on sign-in.
- Sign out (revoke the persisted session).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_204_NO_CONTENT

from namuh_access.api.deps import db_session
from namuh_access.auth.deps import bearer_token, require_principal, session_store_from_app
from namuh_access.auth.models import Role, SignedInUser
from namuh_access.auth.session import SessionStore
from namuh_access.db.models import Subscription, SubscriptionStatus
from namuh_access.db.repositories.subscriptions import SubscriptionRepo
from namuh_access.tiers.catalog import plan_label
from namuh_access.tiers.models import SubscriptionTier

router = APIRouter(prefix="/v1/sessions", tags=["sessions"])


class SubscriptionPayload(BaseModel):
    tier: str
    plan_label: str | None
    status: SubscriptionStatus
    token_balance: int

    @classmethod
    def from_row(cls, sub: Subscription) -> SubscriptionPayload:
        try:
            label = plan_label(SubscriptionTier.parse(sub.tier_name))
        except ValueError:
            label = None
        return cls(
            tier=sub.tier_name,
            plan_label=label,
            status=sub.status,
            token_balance=sub.token_balance,
        )


class CurrentSessionResponse(BaseModel):
    user_id: str
    role: Role
    subscription: SubscriptionPayload | None = None


@router.get("/current", response_model=CurrentSessionResponse)
async def current_session(
    user: SignedInUser = Depends(require_principal),
    session: AsyncSession = Depends(db_session),
) -> CurrentSessionResponse:
    sub = await SubscriptionRepo(session).get(user.user_id)
    return CurrentSessionResponse(
        user_id=user.user_id,
        role=user.role,
        subscription=SubscriptionPayload.from_row(sub) if sub is not None else None,
    )


@router.delete("/current", status_code=HTTP_204_NO_CONTENT)
async def sign_out(
    _: SignedInUser = Depends(require_principal),
    token: str | None = Depends(bearer_token),
    store: SessionStore = Depends(session_store_from_app),
) -> Response:
    # require_principal already proved the token carries an active sid.
    session_id = store.session_id_for(token or "")
    if session_id is not None:
        await store.sign_out(session_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
