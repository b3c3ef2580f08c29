"""
namuh_access.access.models

Access-control value types.

Responsibilities:
- `AccessRequirement`: what a route demands (role and/or tier).
- `AccessDecision`: allow/deny plus a reason code, recomputed per evaluation.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from namuh_access.auth.models import Role
from namuh_access.tiers.models import SubscriptionTier


class AccessReason(enum.StrEnum):
    unauthenticated = "unauthenticated"
    role_mismatch = "role-mismatch"
    tier_insufficient = "tier-insufficient"
    pending = "pending"
    granted = "granted"


@dataclass(frozen=True, slots=True)
class AccessRequirement:
    required_role: Role | None = None
    required_tier: SubscriptionTier | None = None

    @classmethod
    def parse(
        cls, *, required_role: str | None = None, required_tier: str | None = None
    ) -> AccessRequirement:
        return cls(
            required_role=Role(required_role) if required_role else None,
            required_tier=SubscriptionTier.parse(required_tier) if required_tier else None,
        )


@dataclass(frozen=True, slots=True)
class AccessDecision:
    allowed: bool
    reason: AccessReason

    @classmethod
    def deny(cls, reason: AccessReason) -> AccessDecision:
        return cls(allowed=False, reason=reason)

    @classmethod
    def grant(cls) -> AccessDecision:
        return cls(allowed=True, reason=AccessReason.granted)

    @classmethod
    def pending(cls) -> AccessDecision:
        return cls(allowed=False, reason=AccessReason.pending)

    @property
    def is_pending(self) -> bool:
        return self.reason is AccessReason.pending
