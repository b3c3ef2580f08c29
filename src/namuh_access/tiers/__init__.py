"""
namuh_access.tiers

Subscription tier package.

Responsibilities:
- Structured tier identifiers scoped to one role family.
- Static presentation catalog (display names + feature lists).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Entitlement decisions are not made here; they belong to the tier authority.
