"""
tests.test_guard

Rendering decisions into loading / redirect / upgrade / content outcomes.
"""

from __future__ import annotations

import pytest
from fakes import signed_in

from namuh_access.access.guard import GuardRoutes, OutcomeKind, render_outcome
from namuh_access.access.models import AccessDecision, AccessReason, AccessRequirement
from namuh_access.auth.models import Role, SessionState
from namuh_access.settings import Settings

ROUTES = GuardRoutes()


def test_pending_renders_loading_only() -> None:
    outcome = render_outcome(
        AccessDecision.pending(),
        session=SessionState.loading(),
        requirement=AccessRequirement.parse(required_tier="applicant_premium"),
        location="/quiz-me",
        routes=ROUTES,
    )
    assert outcome.kind is OutcomeKind.loading
    assert outcome.redirect_to is None
    assert outcome.upgrade is None


def test_unauthenticated_redirects_to_sign_in_with_origin() -> None:
    outcome = render_outcome(
        AccessDecision.deny(AccessReason.unauthenticated),
        session=SessionState.anonymous(),
        requirement=AccessRequirement(),
        location="/settings/privacy",
        routes=ROUTES,
    )
    assert outcome.kind is OutcomeKind.redirect
    assert outcome.redirect_to == "/login"
    assert outcome.from_location == "/settings/privacy"
    assert outcome.replace


def test_unauthenticated_honors_fallback_route() -> None:
    outcome = render_outcome(
        AccessDecision.deny(AccessReason.unauthenticated),
        session=SessionState.anonymous(),
        requirement=AccessRequirement(),
        location="/chat",
        routes=ROUTES,
        fallback_route="/register",
    )
    assert outcome.redirect_to == "/register"
    assert outcome.from_location == "/chat"


@pytest.mark.parametrize(
    ("role", "home", "required"),
    [
        (Role.applicant, "/dashboard", "recruiter"),
        (Role.recruiter, "/recruiter/dashboard", "applicant"),
    ],
)
def test_role_mismatch_redirects_home_by_role(role: Role, home: str, required: str) -> None:
    outcome = render_outcome(
        AccessDecision.deny(AccessReason.role_mismatch),
        session=signed_in(role=role),
        requirement=AccessRequirement.parse(required_role=required),
        location="/anywhere",
        routes=ROUTES,
    )
    assert outcome.kind is OutcomeKind.redirect
    assert outcome.redirect_to == home
    assert outcome.from_location is None


def test_tier_insufficient_renders_upgrade_prompt() -> None:
    outcome = render_outcome(
        AccessDecision.deny(AccessReason.tier_insufficient),
        session=signed_in(role=Role.applicant),
        requirement=AccessRequirement.parse(required_tier="applicant_professional"),
        location="/quiz-me",
        routes=ROUTES,
    )
    assert outcome.kind is OutcomeKind.upgrade
    prompt = outcome.upgrade
    assert prompt is not None
    assert prompt.display_name == "Professional"
    assert len(prompt.features) == 5
    assert prompt.plan_label == "Bewerber Professional"
    assert prompt.title == "Upgrade auf Professional erforderlich"
    assert prompt.description == "Diese Funktion ist nur im Professional Bewerbenden-Plan verfügbar."
    assert prompt.upgrade_route == "/pricing"


def test_upgrade_prompt_for_recruiter_tier() -> None:
    outcome = render_outcome(
        AccessDecision.deny(AccessReason.tier_insufficient),
        session=signed_in("r1", Role.recruiter),
        requirement=AccessRequirement.parse(required_tier="recruiter_professional"),
        location="/recruiter/talent-pool",
        routes=ROUTES,
    )
    assert outcome.upgrade is not None
    assert outcome.upgrade.description == (
        "Diese Funktion ist nur im Professional Business Recruiter-Plan verfügbar."
    )


def test_granted_renders_content() -> None:
    outcome = render_outcome(
        AccessDecision.grant(),
        session=signed_in(),
        requirement=AccessRequirement(),
        location="/profile",
        routes=ROUTES,
    )
    assert outcome.kind is OutcomeKind.content


def test_routes_follow_settings() -> None:
    routes = GuardRoutes.from_settings(
        Settings(env="test", sign_in_route="/anmelden", applicant_home_route="/start")
    )
    assert routes.sign_in == "/anmelden"
    assert routes.home_for(Role.applicant) == "/start"
    assert routes.home_for(Role.recruiter) == "/recruiter/dashboard"


@pytest.mark.parametrize(
    ("reason", "session", "requirement"),
    [
        (AccessReason.role_mismatch, SessionState.anonymous(), AccessRequirement()),
        (AccessReason.tier_insufficient, signed_in(), AccessRequirement()),
    ],
)
def test_inconsistent_denial_is_rejected(
    reason: AccessReason, session: SessionState, requirement: AccessRequirement
) -> None:
    with pytest.raises(ValueError, match=reason.value):
        render_outcome(
            AccessDecision.deny(reason),
            session=session,
            requirement=requirement,
            location="/x",
            routes=ROUTES,
        )
