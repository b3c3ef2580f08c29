"""
namuh_access.tiers.catalog

Static tier catalog used when access is denied.

Responsibilities:
- Map a tier to its display name and feature-benefit list.
- Degrade unknown tiers to a fallback label and an empty feature list.
"""

from __future__ import annotations

from dataclasses import dataclass

from namuh_access.auth.models import Role
from namuh_access.tiers.models import SubscriptionTier, known_tiers


@dataclass(frozen=True, slots=True)
class TierInfo:
    tier: str
    display_name: str
    features: tuple[str, ...]


_DISPLAY_NAMES: dict[str, str] = {
    "applicant_starter": "Starter",
    "applicant_professional": "Professional",
    "applicant_premium": "Premium",
    "recruiter_basis": "Basis",
    "recruiter_starter": "Starter Business",
    "recruiter_professional": "Professional Business",
    "recruiter_enterprise": "Enterprise",
}

_FEATURES: dict[str, tuple[str, ...]] = {
    "applicant_professional": (
        "50 Tokens pro Monat",
        "Bis zu 20 Dokumente im Speicher",
        "Unbegrenzte Bewerbungshistorie",
        "Zugang zu Quiz-Me mit Tokens",
        "Priority Support",
    ),
    "applicant_premium": (
        "150 Tokens pro Monat",
        "Bis zu 50 Dokumente im Speicher",
        "Erweiterte Bewerbungsverwaltung",
        "Alle Premium-Features ohne Einschränkungen",
        "Priority Support",
    ),
    "recruiter_starter": (
        "Bis zu 7 aktive Stellenanzeigen",
        "5 GB Datenspeicher",
        "Multiposting ohne Servicepauschale",
        "Basis-Statistiken und -Analysen",
        "3 Team-Mitglieder",
    ),
    "recruiter_professional": (
        "Bis zu 20 aktive Stellenanzeigen",
        "25 GB Datenspeicher",
        "Erweiterte Bewerber-verwaltung",
        "Vollständige Statistiken und Analysen",
        "Bis zu 10 Team-Mitglieder",
    ),
    "recruiter_enterprise": (
        "Unbegrenzte aktive Stellenanzeigen",
        "100 GB Datenspeicher",
        "API-Integrationen",
        "Personalisierte Beratung",
        "Unbegrenzte Team-Mitglieder",
    ),
}

_PLAN_ROLE_LABELS: dict[Role, str] = {
    Role.applicant: "Bewerber",
    Role.recruiter: "Recruiter",
}


def describe_tier(tier: SubscriptionTier | str) -> TierInfo:
    identifier = tier.identifier if isinstance(tier, SubscriptionTier) else tier
    display_name = _DISPLAY_NAMES.get(identifier)
    if display_name is None:
        # Fallback label: the level segment, verbatim.
        parts = identifier.split("_")
        display_name = parts[1] if len(parts) > 1 else identifier
    return TierInfo(
        tier=identifier,
        display_name=display_name,
        features=_FEATURES.get(identifier, ()),
    )


def plan_label(tier: SubscriptionTier) -> str:
    return f"{_PLAN_ROLE_LABELS[tier.role]} {tier.level[:1].upper()}{tier.level[1:]}"


def catalog() -> list[TierInfo]:
    """Every ranked tier, grouped by role family in ascending order."""
    return [describe_tier(tier) for tier in known_tiers()]


# --- Module Notes -----------------------------------------------------------
# Adding a tier means adding it here and to `tiers.models.TIER_LEVELS`; a tier
# missing from this table still renders, just with the fallback label.
