"""
namuh_access.api.routers.access

Route guard endpoints.

Responsibilities:
- Evaluate an explicit requirement for the bearer's session.
- Evaluate a front-end path against the route table.
- Return both the decision and the outcome the client should render.
"""

from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from namuh_access.access.guard import GuardOutcome
from namuh_access.access.models import AccessRequirement
from namuh_access.api.deps import settings_dep, tier_authority_http
from namuh_access.auth.deps import get_session_state
from namuh_access.auth.models import Role, SessionState
from namuh_access.services.access_service import AccessCheck, AccessService
from namuh_access.settings import Settings
from namuh_access.tiers.models import SubscriptionTier

router = APIRouter(prefix="/v1/access", tags=["access"])


class AccessCheckRequest(BaseModel):
    required_role: Role | None = None
    required_tier: str | None = None
    fallback_route: str | None = Field(default=None, max_length=512)
    location: str = Field(default="/", max_length=2048)

    @field_validator("required_tier")
    @classmethod
    def _parse_tier(cls, v: str | None) -> str | None:
        return SubscriptionTier.parse(v).identifier if v else None


class RouteCheckRequest(BaseModel):
    path: str = Field(min_length=1, max_length=2048)


class DecisionPayload(BaseModel):
    allowed: bool
    reason: str


class UpgradePayload(BaseModel):
    tier: str
    display_name: str
    plan_label: str
    title: str
    description: str
    features: list[str]
    upgrade_route: str


class OutcomePayload(BaseModel):
    kind: str
    redirect_to: str | None = None
    from_location: str | None = None
    replace: bool = False
    upgrade: UpgradePayload | None = None

    @classmethod
    def build(cls, outcome: GuardOutcome) -> OutcomePayload:
        upgrade = outcome.upgrade
        return cls(
            kind=outcome.kind.value,
            redirect_to=outcome.redirect_to,
            from_location=outcome.from_location,
            replace=outcome.replace,
            upgrade=UpgradePayload(
                tier=upgrade.tier,
                display_name=upgrade.display_name,
                plan_label=upgrade.plan_label,
                title=upgrade.title,
                description=upgrade.description,
                features=list(upgrade.features),
                upgrade_route=upgrade.upgrade_route,
            )
            if upgrade is not None
            else None,
        )


class AccessCheckResponse(BaseModel):
    decision: DecisionPayload
    outcome: OutcomePayload
    route_pattern: str | None = None

    @classmethod
    def build(cls, check: AccessCheck) -> AccessCheckResponse:
        return cls(
            decision=DecisionPayload(
                allowed=check.decision.allowed, reason=check.decision.reason.value
            ),
            outcome=OutcomePayload.build(check.outcome),
            route_pattern=check.route_pattern,
        )


@router.post("/check", response_model=AccessCheckResponse)
async def check_access(
    body: AccessCheckRequest,
    session: SessionState = Depends(get_session_state),
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(tier_authority_http),
) -> AccessCheckResponse:
    requirement = AccessRequirement.parse(
        required_role=body.required_role, required_tier=body.required_tier
    )
    svc = AccessService(settings=settings, http=http)
    check = await svc.check(
        session=session,
        requirement=requirement,
        location=body.location,
        fallback_route=body.fallback_route,
    )
    return AccessCheckResponse.build(check)


@router.post("/routes/check", response_model=AccessCheckResponse)
async def check_route(
    body: RouteCheckRequest,
    session: SessionState = Depends(get_session_state),
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(tier_authority_http),
) -> AccessCheckResponse:
    svc = AccessService(settings=settings, http=http)
    return AccessCheckResponse.build(await svc.check_route(session=session, path=body.path))


# --- Module Notes -----------------------------------------------------------
# Authority failures never reach this layer as errors; they arrive as a
# `tier-insufficient` decision with an upgrade outcome.
