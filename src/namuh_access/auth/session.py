"""
namuh_access.auth.session

Process-wide session store.

Responsibilities:
- Sign a user in: persist a session row and issue a session JWT.
- Restore a `SessionState` from a bearer token (the persisted-session check).
- Sign a user out by revoking the persisted session.

The store is created once at application startup and disposed at shutdown
(see `api.app`). Readers only ever see immutable `SessionState` snapshots.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from namuh_access.auth.jwt import (
    SESSION_SCOPE,
    JwtConfig,
    JwtValidationError,
    decode_and_validate,
    issue_token,
)
from namuh_access.auth.models import Principal, Role, SessionState
from namuh_access.db.repositories.sessions import SessionRepo
from namuh_access.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class IssuedSession:
    session_id: uuid.UUID
    access_token: str
    principal: Principal


class SessionStore:
    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        jwt_cfg: JwtConfig,
        ttl: timedelta,
    ) -> None:
        self._session_factory = session_factory
        self._jwt_cfg = jwt_cfg
        self._ttl = ttl
        self._closed = False

    async def sign_in(self, *, user_id: str, role: Role) -> IssuedSession:
        self._ensure_open()
        async with self._session_factory() as db:
            row = await SessionRepo(db).create(user_id=user_id, role=role.value)
            await db.commit()

        token = issue_token(
            cfg=self._jwt_cfg,
            subject=user_id,
            scope=SESSION_SCOPE,
            claims={"role": role.value, "sid": str(row.id)},
            ttl=self._ttl,
        )
        log.info("session_signed_in", user_id=user_id, role=role.value, session_id=str(row.id))
        return IssuedSession(
            session_id=row.id,
            access_token=token,
            principal=Principal.signed_in(user_id=user_id, role=role),
        )

    async def restore(self, token: str | None) -> SessionState:
        """
        Resolve a bearer token into a session snapshot.

        Anything short of a valid token bound to an active session yields the
        anonymous state; callers decide what "unauthenticated" means for them.
        """

        self._ensure_open()
        if not token:
            return SessionState.anonymous()

        try:
            payload = decode_and_validate(cfg=self._jwt_cfg, token=token, scope=SESSION_SCOPE)
        except JwtValidationError as e:
            log.info("session_restore_rejected", reason=str(e))
            return SessionState.anonymous()

        session_id = _parse_session_id(payload.get("sid"))
        if session_id is None:
            log.info("session_restore_rejected", reason="missing or malformed sid")
            return SessionState.anonymous()

        async with self._session_factory() as db:
            row = await SessionRepo(db).get_active(session_id)

        if row is None:
            log.info("session_restore_rejected", reason="session revoked or unknown")
            return SessionState.anonymous()
        if row.user_id != payload.get("sub"):
            log.warning("session_restore_rejected", reason="subject does not match session")
            return SessionState.anonymous()

        return SessionState(principal=Principal.signed_in(user_id=row.user_id, role=Role(row.role)))

    def session_id_for(self, token: str) -> uuid.UUID | None:
        try:
            payload = decode_and_validate(cfg=self._jwt_cfg, token=token, scope=SESSION_SCOPE)
        except JwtValidationError:
            return None
        return _parse_session_id(payload.get("sid"))

    async def sign_out(self, session_id: uuid.UUID) -> bool:
        self._ensure_open()
        async with self._session_factory() as db:
            revoked = await SessionRepo(db).revoke(session_id)
            await db.commit()
        if revoked:
            log.info("session_signed_out", session_id=str(session_id))
        return revoked

    @property
    def is_open(self) -> bool:
        return not self._closed

    def close(self) -> None:
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("session store is closed")


def _parse_session_id(raw: object) -> uuid.UUID | None:
    if not isinstance(raw, str):
        return None
    try:
        return uuid.UUID(raw)
    except ValueError:
        return None


# --- Module Notes -----------------------------------------------------------
# Tokens stay valid until `exp`, but a revoked session makes `restore` anonymous
# immediately; sign-out does not depend on token expiry.
