"""
namuh_access.tier_authority

Tier authority boundary.

Responsibilities:
- Define the `TierAuthority` contract the access evaluator depends on.
- Provide the HTTP client implementation.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The evaluator depends on the protocol only; tests substitute in-memory fakes.
