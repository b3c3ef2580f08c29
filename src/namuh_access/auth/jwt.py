"""
namuh_access.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue session tokens for signed-in users and short-lived service tokens for
  tier-authority calls.
- Decode and validate JWTs with strict claim requirements (iss/aud/exp/iat/sub).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from namuh_access.settings import Settings

SESSION_SCOPE = "session"
INTERNAL_SCOPE = "internal_system"


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    audience: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
        )


class JwtValidationError(Exception):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    scope: str,
    claims: dict[str, Any] | None = None,
    ttl: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        **(claims or {}),
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "scope": scope,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(
    *, cfg: JwtConfig, token: str, scope: str | None = None
) -> dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub"],
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e

    if scope is not None and payload.get("scope") != scope:
        raise JwtValidationError(f"token scope is not {scope!r}")
    return payload


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by:
# - `auth/session.py` (session tokens, scope=session)
# - `tier_authority/client.py` (service tokens, scope=internal_system)
