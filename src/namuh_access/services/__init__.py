"""
namuh_access.services

Service-layer package.

Responsibilities:
- Compose the evaluator, tier authority client and guard for the API layer.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services are plain Python and testable with fake HTTP transports.
