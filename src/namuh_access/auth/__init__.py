"""
namuh_access.auth

Authentication package.

Responsibilities:
- Principal and session-state types.
- JWT helpers and validation.
- Process-wide session store and FastAPI dependencies.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The access evaluator reads `SessionState` only; mutations go through `SessionStore`.
