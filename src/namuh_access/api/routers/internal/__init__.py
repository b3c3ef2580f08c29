"""
namuh_access.api.routers.internal

Internal service API package.

Responsibilities:
- Host the reference tier authority under `/internal/v1/*`.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# In production the tier authority is a separate service; `tier_authority_url` points at it.
