"""
namuh_access.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, engine/session setup, and repositories.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Two tables only: persisted sign-in sessions and the reference authority's subscriptions.
