"""
namuh_access.access.guard

Turn an `AccessDecision` into what the route guard renders.

Responsibilities:
- `pending` shows a loading placeholder and nothing else (no redirect, no prompt).
- `unauthenticated` redirects to sign-in, carrying the requested location.
- `role-mismatch` redirects to the principal's own dashboard.
- `tier-insufficient` renders an upgrade prompt built from the tier catalog.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from namuh_access.access.models import AccessDecision, AccessReason, AccessRequirement
from namuh_access.auth.models import Role, SessionState
from namuh_access.settings import Settings
from namuh_access.tiers.catalog import describe_tier, plan_label
from namuh_access.tiers.models import SubscriptionTier

_ROLE_TITLES: dict[Role, str] = {
    Role.applicant: "Bewerbenden",
    Role.recruiter: "Recruiter",
}


class OutcomeKind(enum.StrEnum):
    loading = "loading"
    redirect = "redirect"
    upgrade = "upgrade"
    content = "content"


@dataclass(frozen=True, slots=True)
class GuardRoutes:
    sign_in: str = "/login"
    applicant_home: str = "/dashboard"
    recruiter_home: str = "/recruiter/dashboard"
    upgrade: str = "/pricing"

    @classmethod
    def from_settings(cls, settings: Settings) -> GuardRoutes:
        return cls(
            sign_in=settings.sign_in_route,
            applicant_home=settings.applicant_home_route,
            recruiter_home=settings.recruiter_home_route,
            upgrade=settings.upgrade_route,
        )

    def home_for(self, role: Role) -> str:
        return self.applicant_home if role is Role.applicant else self.recruiter_home


@dataclass(frozen=True, slots=True)
class UpgradePrompt:
    tier: str
    display_name: str
    plan_label: str
    title: str
    description: str
    features: tuple[str, ...]
    upgrade_route: str


@dataclass(frozen=True, slots=True)
class GuardOutcome:
    kind: OutcomeKind
    redirect_to: str | None = None
    from_location: str | None = None
    replace: bool = False
    upgrade: UpgradePrompt | None = None


def render_outcome(
    decision: AccessDecision,
    *,
    session: SessionState,
    requirement: AccessRequirement,
    location: str,
    routes: GuardRoutes,
    fallback_route: str | None = None,
) -> GuardOutcome:
    match decision.reason:
        case AccessReason.pending:
            return GuardOutcome(kind=OutcomeKind.loading)
        case AccessReason.granted:
            return GuardOutcome(kind=OutcomeKind.content)
        case AccessReason.unauthenticated:
            return GuardOutcome(
                kind=OutcomeKind.redirect,
                redirect_to=fallback_route or routes.sign_in,
                from_location=location,
                replace=True,
            )
        case AccessReason.role_mismatch if session.principal.role is not None:
            return GuardOutcome(
                kind=OutcomeKind.redirect,
                redirect_to=routes.home_for(session.principal.role),
                replace=True,
            )
        case AccessReason.tier_insufficient if requirement.required_tier is not None:
            return GuardOutcome(
                kind=OutcomeKind.upgrade,
                upgrade=_upgrade_prompt(
                    session=session, tier=requirement.required_tier, routes=routes
                ),
            )
    # role-mismatch without a role, or tier-insufficient without a tier.
    raise ValueError(f"cannot render {decision.reason.value!r} for this session and requirement")


def _upgrade_prompt(
    *, session: SessionState, tier: SubscriptionTier, routes: GuardRoutes
) -> UpgradePrompt:
    info = describe_tier(tier)
    # The prompt addresses the viewer's own family, even when the route asked for the other one.
    role = session.principal.role or tier.role
    return UpgradePrompt(
        tier=info.tier,
        display_name=info.display_name,
        plan_label=plan_label(tier),
        title=f"Upgrade auf {info.display_name} erforderlich",
        description=(
            f"Diese Funktion ist nur im {info.display_name} {_ROLE_TITLES[role]}-Plan verfügbar."
        ),
        features=info.features,
        upgrade_route=routes.upgrade,
    )


# --- Module Notes -----------------------------------------------------------
# Denials never surface as errors: every non-granted decision maps to a redirect
# or an upgrade prompt, and `pending` maps to the loading placeholder.
