"""
namuh_access.db.repositories.sessions

Repository for `AuthSession` entities.

Responsibilities:
- Persist new sign-in sessions.
- Fetch active sessions for restore.
- Revoke sessions on sign-out.
"""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from namuh_access.db.models import AuthSession, utcnow


class SessionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, user_id: str, role: str) -> AuthSession:
        row = AuthSession(user_id=user_id, role=role)
        self._session.add(row)
        await self._session.flush()
        return row

    async def get_active(self, session_id: uuid.UUID) -> AuthSession | None:
        row = await self._session.get(AuthSession, session_id)
        if row is None or not row.is_active:
            return None
        return row

    async def revoke(self, session_id: uuid.UUID) -> bool:
        row = await self._session.get(AuthSession, session_id, with_for_update=True)
        if row is None or not row.is_active:
            return False
        row.revoked_at = utcnow()
        await self._session.flush()
        return True
