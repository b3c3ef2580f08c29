"""
namuh_access.access.evaluator

The access decision for a `(session, requirement)` pair.

Responsibilities:
- Run the local checks in a fixed order: loading, authentication, role, tier family.
- Delegate entitlement to the tier authority when a tier is required.
- Fail closed: authority errors become `tier-insufficient`, logged but never raised.
"""

from __future__ import annotations

from dataclasses import dataclass

from namuh_access.access.models import AccessDecision, AccessReason, AccessRequirement
from namuh_access.auth.models import SessionState
from namuh_access.observability.logging import get_logger
from namuh_access.tier_authority.client import TierAuthority
from namuh_access.tiers.models import SubscriptionTier

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class TierCheck:
    """The one question left for the tier authority."""

    user_id: str
    tier: SubscriptionTier

    @property
    def key(self) -> tuple[str, str]:
        return (self.user_id, self.tier.identifier)


class AccessEvaluator:
    def __init__(self, *, authority: TierAuthority) -> None:
        self._authority = authority

    def precheck(
        self, session: SessionState, requirement: AccessRequirement
    ) -> AccessDecision | TierCheck:
        """
        Decide everything that can be decided without the tier authority.

        Returns a `TierCheck` only when the remaining question is the remote
        entitlement check.
        """

        if session.is_loading:
            return AccessDecision.pending()

        principal = session.principal
        if not principal.is_authenticated or principal.id is None:
            return AccessDecision.deny(AccessReason.unauthenticated)

        if requirement.required_role is not None and principal.role != requirement.required_role:
            return AccessDecision.deny(AccessReason.role_mismatch)

        tier = requirement.required_tier
        if tier is None:
            return AccessDecision.grant()

        if tier.role != principal.role:
            # A route requiring another family's tier is a routing configuration error.
            log.warning(
                "tier_prefix_mismatch",
                user_id=principal.id,
                role=str(principal.role),
                required_tier=tier.identifier,
            )
            return AccessDecision.deny(AccessReason.tier_insufficient)

        return TierCheck(user_id=principal.id, tier=tier)

    async def evaluate(
        self, session: SessionState, requirement: AccessRequirement
    ) -> AccessDecision:
        local = self.precheck(session, requirement)
        if isinstance(local, AccessDecision):
            return local
        return await self.check_tier(local)

    async def check_tier(self, check: TierCheck) -> AccessDecision:
        try:
            has_access = await self._authority.check_access(
                user_id=check.user_id, required_tier=check.tier
            )
        except Exception:
            log.warning(
                "tier_check_failed",
                user_id=check.user_id,
                required_tier=check.tier.identifier,
                exc_info=True,
            )
            return AccessDecision.deny(AccessReason.tier_insufficient)

        if has_access:
            return AccessDecision.grant()
        return AccessDecision.deny(AccessReason.tier_insufficient)


# --- Module Notes -----------------------------------------------------------
# Decisions are not cached: two calls with the same inputs make two authority calls.
