"""
namuh_access.auth.deps

FastAPI dependency functions for authentication.

Responsibilities:
- Restore the caller's `SessionState` from a bearer token (anonymous when absent).
- Require a signed-in principal for session-management endpoints.
- Guard internal tier-authority routes with service tokens.
"""

from __future__ import annotations

import structlog
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from namuh_access.auth.jwt import INTERNAL_SCOPE, JwtConfig, JwtValidationError, decode_and_validate
from namuh_access.auth.models import SessionState, SignedInUser
from namuh_access.auth.session import SessionStore
from namuh_access.settings import Settings

_bearer = HTTPBearer(auto_error=False)


def settings_from_app(request: Request) -> Settings:
    # The app keeps the Settings it was built with; `get_settings()` only seeds the default.
    return request.app.state.settings  # type: ignore[attr-defined]


def session_store_from_app(request: Request) -> SessionStore:
    # Created on app startup in `namuh_access.api.app.create_app`.
    return request.app.state.session_store  # type: ignore[attr-defined]


def bearer_token(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str | None:
    if creds is None or not creds.credentials:
        return None
    return creds.credentials


async def get_session_state(
    token: str | None = Depends(bearer_token),
    store: SessionStore = Depends(session_store_from_app),
) -> SessionState:
    # Unauthenticated is a decision for the guard, not an HTTP error.
    state = await store.restore(token)
    if state.principal.is_authenticated:
        structlog.contextvars.bind_contextvars(user_id=state.principal.id)
    return state


def require_principal(state: SessionState = Depends(get_session_state)) -> SignedInUser:
    principal = state.principal
    if not principal.is_authenticated or principal.id is None or principal.role is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Not signed in")
    return SignedInUser(user_id=principal.id, role=principal.role)


def require_internal_system(
    token: str | None = Depends(bearer_token),
    settings: Settings = Depends(settings_from_app),
) -> str:
    if token is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=token)
    except JwtValidationError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    if payload.get("scope") != INTERNAL_SCOPE:
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Insufficient scope")
    return str(payload["sub"])


# --- Module Notes -----------------------------------------------------------
# User-facing access checks always go through `get_session_state`; only the
# session endpoints themselves turn "anonymous" into a 401.
