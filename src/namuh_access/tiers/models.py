"""
namuh_access.tiers.models

Structured subscription tier identifiers.

Responsibilities:
- Pair a role family with a level instead of passing `<role>_<level>` strings around.
- Rank known levels within their family (no cross-role comparison).
"""

from __future__ import annotations

from dataclasses import dataclass

from namuh_access.auth.models import Role

# Lowest to highest within each family.
TIER_LEVELS: dict[Role, tuple[str, ...]] = {
    Role.applicant: ("starter", "professional", "premium"),
    Role.recruiter: ("basis", "starter", "professional", "enterprise"),
}


@dataclass(frozen=True, slots=True)
class SubscriptionTier:
    role: Role
    level: str

    @classmethod
    def parse(cls, identifier: str) -> SubscriptionTier:
        prefix, sep, level = identifier.partition("_")
        if not sep or not level:
            raise ValueError(f"malformed tier identifier: {identifier!r}")
        try:
            role = Role(prefix)
        except ValueError:
            raise ValueError(f"unknown role family in tier identifier: {identifier!r}") from None
        return cls(role=role, level=level)

    @property
    def identifier(self) -> str:
        return f"{self.role.value}_{self.level}"

    @property
    def rank(self) -> int | None:
        # Unknown levels are representable but unranked.
        levels = TIER_LEVELS[self.role]
        return levels.index(self.level) if self.level in levels else None

    @property
    def is_known(self) -> bool:
        return self.rank is not None

    def covers(self, required: SubscriptionTier) -> bool:
        """
        True when holding `self` satisfies `required`: same role family and a rank
        at least as high. Unranked tiers never satisfy and are never satisfied.
        """

        if self.role != required.role:
            return False
        held, needed = self.rank, required.rank
        if held is None or needed is None:
            return False
        return held >= needed

    def __str__(self) -> str:
        return self.identifier


def known_tiers() -> list[SubscriptionTier]:
    return [
        SubscriptionTier(role=role, level=level)
        for role, levels in TIER_LEVELS.items()
        for level in levels
    ]
