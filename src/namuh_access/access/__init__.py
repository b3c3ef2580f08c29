"""
namuh_access.access

Route access-control package.

Responsibilities:
- Decision types and the access evaluator.
- Guard outcome rendering (loading / redirect / upgrade / content).
- Reactive re-evaluation with stale-result protection.
- Static front-end route requirements.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package mutates session state; it only reads `SessionState`.
