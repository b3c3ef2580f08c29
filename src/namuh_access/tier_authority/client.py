"""
namuh_access.tier_authority.client

HTTP client boundary for the subscription tier authority.

Responsibilities:
- Attach short-lived service JWT credentials (scope=internal_system) and the
  caller's request id.
- Ask the authority whether a user is entitled to a tier or higher.
- Convert transport failures, error statuses and malformed payloads into
  `TierAuthorityError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol

import httpx
import structlog

from namuh_access.auth.jwt import INTERNAL_SCOPE, JwtConfig, issue_token
from namuh_access.settings import Settings
from namuh_access.tiers.models import SubscriptionTier

CHECK_ACCESS_PATH = "/internal/v1/subscriptions/check-access"


class TierAuthority(Protocol):
    async def check_access(self, *, user_id: str, required_tier: SubscriptionTier) -> bool: ...


class TierAuthorityError(Exception):
    pass


@dataclass(frozen=True, slots=True)
class ServiceIdentity:
    subject: str = "namuh-access"


class TierAuthorityClient:
    def __init__(
        self,
        *,
        settings: Settings,
        http: httpx.AsyncClient,
        identity: ServiceIdentity | None = None,
    ) -> None:
        self._settings = settings
        self._http = http
        self._identity = identity or ServiceIdentity()

    def _headers(self) -> dict[str, str]:
        token = issue_token(
            cfg=JwtConfig.from_settings(self._settings),
            subject=self._identity.subject,
            scope=INTERNAL_SCOPE,
            ttl=timedelta(minutes=5),
        )
        headers = {"Authorization": f"Bearer {token}"}
        request_id = structlog.contextvars.get_contextvars().get("request_id")
        if request_id:
            headers["x-request-id"] = request_id
        return headers

    async def check_access(self, *, user_id: str, required_tier: SubscriptionTier) -> bool:
        try:
            r = await self._http.post(
                CHECK_ACCESS_PATH,
                headers=self._headers(),
                json={"user_id": user_id, "required_tier": required_tier.identifier},
            )
            r.raise_for_status()
            body = r.json()
        except httpx.HTTPError as e:
            raise TierAuthorityError(f"tier authority request failed: {e}") from e
        except ValueError as e:
            raise TierAuthorityError("tier authority returned invalid JSON") from e

        has_access = body.get("has_access") if isinstance(body, dict) else None
        if not isinstance(has_access, bool):
            raise TierAuthorityError("tier authority response is missing a boolean 'has_access'")
        return has_access


# --- Module Notes -----------------------------------------------------------
# No retries and no caching here: each call is one request. The only bound on
# waiting is the httpx client's timeout (`tier_authority_timeout_seconds`).
