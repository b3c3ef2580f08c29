"""
namuh_access.api.routers.tiers

Read-only tier catalog endpoints.

Responsibilities:
- List the catalog.
- Describe one tier; unknown tiers degrade to the fallback label, malformed ones are 422.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from namuh_access.tiers.catalog import TierInfo, catalog, describe_tier
from namuh_access.tiers.models import SubscriptionTier

router = APIRouter(prefix="/v1/tiers", tags=["tiers"])


class TierResponse(BaseModel):
    tier: str
    role: str
    level: str
    display_name: str
    features: list[str]
    known: bool

    @classmethod
    def build(cls, tier: SubscriptionTier, info: TierInfo) -> TierResponse:
        return cls(
            tier=info.tier,
            role=tier.role.value,
            level=tier.level,
            display_name=info.display_name,
            features=list(info.features),
            known=tier.is_known,
        )


@router.get("", response_model=list[TierResponse])
async def list_tiers() -> list[TierResponse]:
    return [TierResponse.build(SubscriptionTier.parse(info.tier), info) for info in catalog()]


@router.get("/{tier_id}", response_model=TierResponse)
async def get_tier(tier_id: str) -> TierResponse:
    try:
        tier = SubscriptionTier.parse(tier_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return TierResponse.build(tier, describe_tier(tier))
