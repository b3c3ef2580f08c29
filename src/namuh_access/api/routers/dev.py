from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_404_NOT_FOUND

from namuh_access.api.deps import db_session, settings_dep
from namuh_access.auth.deps import session_store_from_app
from namuh_access.auth.models import Role
from namuh_access.auth.session import SessionStore
from namuh_access.db.models import SubscriptionStatus
from namuh_access.db.repositories.subscriptions import SubscriptionRepo
from namuh_access.settings import Settings
from namuh_access.tiers.models import SubscriptionTier

router = APIRouter(prefix="/v1/dev", tags=["dev"])


def _dev_only(settings: Settings = Depends(settings_dep)) -> None:
    # Sign-in belongs to the identity provider; these shortcuts never exist in prod.
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")


class DevSignInRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=256)
    role: Role


class DevSignInResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    session_id: str


class DevSubscriptionRequest(BaseModel):
    tier: str
    status: SubscriptionStatus = SubscriptionStatus.active
    token_balance: int = Field(default=0, ge=0)

    @field_validator("tier")
    @classmethod
    def _known_family(cls, v: str) -> str:
        return SubscriptionTier.parse(v).identifier


class DevSubscriptionResponse(BaseModel):
    user_id: str
    tier: str
    status: SubscriptionStatus
    token_balance: int


@router.post("/sign-in", response_model=DevSignInResponse, dependencies=[Depends(_dev_only)])
async def dev_sign_in(
    body: DevSignInRequest,
    store: SessionStore = Depends(session_store_from_app),
) -> DevSignInResponse:
    issued = await store.sign_in(user_id=body.user_id, role=body.role)
    return DevSignInResponse(access_token=issued.access_token, session_id=str(issued.session_id))


@router.put(
    "/subscriptions/{user_id}",
    response_model=DevSubscriptionResponse,
    dependencies=[Depends(_dev_only)],
)
async def dev_put_subscription(
    user_id: str,
    body: DevSubscriptionRequest,
    session: AsyncSession = Depends(db_session),
) -> DevSubscriptionResponse:
    sub = await SubscriptionRepo(session).upsert(
        user_id=user_id,
        tier_name=body.tier,
        status=body.status,
        token_balance=body.token_balance,
    )
    await session.commit()
    return DevSubscriptionResponse(
        user_id=sub.user_id,
        tier=sub.tier_name,
        status=sub.status,
        token_balance=sub.token_balance,
    )
