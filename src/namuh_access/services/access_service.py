"""
namuh_access.services.access_service

Access check service (evaluator + authority client + guard).

Responsibilities:
- Build the tier authority client over the injected HTTP client.
- Evaluate a requirement for a session and render the guard outcome.
- Emit one `access_evaluated` log line per check.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import httpx

from namuh_access.access.evaluator import AccessEvaluator
from namuh_access.access.guard import GuardOutcome, GuardRoutes, OutcomeKind, render_outcome
from namuh_access.access.models import AccessDecision, AccessRequirement
from namuh_access.access.routes import match_route
from namuh_access.auth.models import SessionState
from namuh_access.observability.logging import get_logger
from namuh_access.settings import Settings
from namuh_access.tier_authority.client import TierAuthority, TierAuthorityClient

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AccessCheck:
    requirement: AccessRequirement
    decision: AccessDecision
    outcome: GuardOutcome
    route_pattern: str | None = None


class AccessService:
    def __init__(
        self,
        *,
        settings: Settings,
        http: httpx.AsyncClient | None = None,
        authority: TierAuthority | None = None,
    ) -> None:
        if authority is None:
            if http is None:
                raise ValueError("either http or authority is required")
            authority = TierAuthorityClient(settings=settings, http=http)
        self._evaluator = AccessEvaluator(authority=authority)
        self._routes = GuardRoutes.from_settings(settings)

    async def check(
        self,
        *,
        session: SessionState,
        requirement: AccessRequirement,
        location: str,
        fallback_route: str | None = None,
    ) -> AccessCheck:
        decision = await self._evaluator.evaluate(session, requirement)
        outcome = render_outcome(
            decision,
            session=session,
            requirement=requirement,
            location=location,
            routes=self._routes,
            fallback_route=fallback_route,
        )
        log.info(
            "access_evaluated",
            location=location,
            required_role=str(requirement.required_role) if requirement.required_role else None,
            required_tier=str(requirement.required_tier) if requirement.required_tier else None,
            allowed=decision.allowed,
            reason=decision.reason.value,
            outcome=outcome.kind.value,
        )
        return AccessCheck(requirement=requirement, decision=decision, outcome=outcome)

    async def check_route(self, *, session: SessionState, path: str) -> AccessCheck:
        rule = match_route(path)
        if rule is None:
            # Public route: nothing to evaluate, not even authentication.
            return AccessCheck(
                requirement=AccessRequirement(),
                decision=AccessDecision.grant(),
                outcome=GuardOutcome(kind=OutcomeKind.content),
            )

        result = await self.check(session=session, requirement=rule.requirement, location=path)
        return replace(result, route_pattern=rule.pattern)


# --- Module Notes -----------------------------------------------------------
# The evaluator is rebuilt per service instance; the service is request-scoped.
