"""
namuh_access.access.routes

Front-end route requirements.

Responsibilities:
- Declare which routes require sign-in, a role, and/or a subscription tier.
- Match a concrete path (e.g. `/recruiter/jobs/42/edit`) to its requirement.
"""

from __future__ import annotations

from dataclasses import dataclass

from namuh_access.access.models import AccessRequirement
from namuh_access.auth.models import Role
from namuh_access.tiers.models import SubscriptionTier


@dataclass(frozen=True, slots=True)
class RouteRule:
    pattern: str
    requirement: AccessRequirement

    @property
    def segments(self) -> tuple[str, ...]:
        return _split(self.pattern)


def _rule(pattern: str, role: Role | None = None, tier: str | None = None) -> RouteRule:
    return RouteRule(
        pattern=pattern,
        requirement=AccessRequirement(
            required_role=role,
            required_tier=SubscriptionTier.parse(tier) if tier else None,
        ),
    )


# Routes absent from this table are public.
ROUTE_RULES: tuple[RouteRule, ...] = (
    # Any signed-in user
    _rule("/chat"),
    _rule("/profile"),
    _rule("/settings"),
    _rule("/settings/privacy"),
    _rule("/settings/processing-register"),
    _rule("/settings/subscription"),
    # Applicants
    _rule("/dashboard", Role.applicant),
    _rule("/applications", Role.applicant),
    _rule("/ai-hub", Role.applicant),
    _rule("/ai-hub/:tool", Role.applicant),
    _rule("/quiz-me", Role.applicant, "applicant_professional"),
    _rule("/gemini-chat", Role.applicant),
    _rule("/quick-apply", Role.applicant),
    # Recruiters
    _rule("/recruiter/dashboard", Role.recruiter),
    _rule("/recruiter/jobs", Role.recruiter),
    _rule("/recruiter/jobs/create", Role.recruiter),
    _rule("/recruiter/jobs/:id", Role.recruiter),
    _rule("/recruiter/jobs/:id/edit", Role.recruiter),
    _rule("/recruiter/jobs/:id/applications", Role.recruiter),
    _rule("/recruiter/jobs/:id/analytics", Role.recruiter),
    _rule("/recruiter/applications", Role.recruiter),
    _rule("/recruiter/applications/:id", Role.recruiter),
    _rule("/recruiter/talent-pool", Role.recruiter, "recruiter_professional"),
    _rule("/recruiter/analytics", Role.recruiter, "recruiter_starter"),
    _rule("/recruiter/templates", Role.recruiter),
    _rule("/recruiter/multiposting", Role.recruiter),
)


def _split(path: str) -> tuple[str, ...]:
    return tuple(s for s in path.split("?", 1)[0].split("/") if s)


def _score(pattern: tuple[str, ...], path: tuple[str, ...]) -> int | None:
    # Number of static segments matched; None if the pattern does not match at all.
    if len(pattern) != len(path):
        return None
    score = 0
    for want, got in zip(pattern, path, strict=True):
        if want.startswith(":"):
            continue
        if want != got:
            return None
        score += 1
    return score


def match_route(path: str, rules: tuple[RouteRule, ...] = ROUTE_RULES) -> RouteRule | None:
    """
    Most specific matching rule for `path`, or None for public routes.

    Static segments beat `:param` segments, so `/recruiter/jobs/create` is never
    read as `/recruiter/jobs/:id`.
    """

    segments = _split(path)
    best: RouteRule | None = None
    best_score = -1
    for rule in rules:
        score = _score(rule.segments, segments)
        if score is not None and score > best_score:
            best, best_score = rule, score
    return best


# --- Module Notes -----------------------------------------------------------
# The table mirrors the web client's router; keep both in sync when routes move.
