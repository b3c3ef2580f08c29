"""
tests.test_api

End-to-end access checks through the API, with the in-process reference tier authority.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fakes import LogEvents
from fastapi import FastAPI

from namuh_access.api.app import create_app
from namuh_access.settings import Settings


async def _sign_in(client: httpx.AsyncClient, user_id: str, role: str) -> dict[str, str]:
    r = await client.post("/v1/dev/sign-in", json={"user_id": user_id, "role": role})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


async def _subscribe(
    client: httpx.AsyncClient,
    user_id: str,
    tier: str,
    status: str = "active",
    token_balance: int = 0,
) -> None:
    r = await client.put(
        f"/v1/dev/subscriptions/{user_id}",
        json={"tier": tier, "status": status, "token_balance": token_balance},
    )
    assert r.status_code == 200, r.text


@pytest.mark.asyncio
async def test_anonymous_is_redirected_to_sign_in(client: httpx.AsyncClient) -> None:
    r = await client.post(
        "/v1/access/check",
        json={
            "required_role": "recruiter",
            "required_tier": "recruiter_enterprise",
            "location": "/x",
        },
    )
    assert r.status_code == 200
    body = r.json()
    assert body["decision"] == {"allowed": False, "reason": "unauthenticated"}
    assert body["outcome"]["kind"] == "redirect"
    assert body["outcome"]["redirect_to"] == "/login"
    assert body["outcome"]["from_location"] == "/x"


@pytest.mark.asyncio
async def test_tier_granted_via_reference_authority(client: httpx.AsyncClient) -> None:
    headers = await _sign_in(client, "u1", "applicant")
    await _subscribe(client, "u1", "applicant_premium")

    r = await client.post(
        "/v1/access/check",
        headers=headers,
        json={"required_tier": "applicant_professional", "location": "/quiz-me"},
    )
    body = r.json()
    assert body["decision"] == {"allowed": True, "reason": "granted"}
    assert body["outcome"]["kind"] == "content"


@pytest.mark.asyncio
async def test_tier_check_keeps_request_context(
    client: httpx.AsyncClient, log_events: LogEvents
) -> None:
    headers = await _sign_in(client, "u1", "applicant")
    await _subscribe(client, "u1", "applicant_premium")

    r = await client.post(
        "/v1/access/check",
        headers={**headers, "x-request-id": "outer-req"},
        json={"required_tier": "applicant_professional", "location": "/quiz-me"},
    )
    assert r.headers["x-request-id"] == "outer-req"

    (event,) = log_events("access_evaluated")
    assert event["request_id"] == "outer-req"
    assert event["path"] == "/v1/access/check"
    assert event["user_id"] == "u1"
    assert event["allowed"] is True

    # The in-process authority call is logged under the same request id.
    completed = {e["path"]: e["request_id"] for e in log_events("request_completed")}
    assert completed["/internal/v1/subscriptions/check-access"] == "outer-req"
    assert completed["/v1/access/check"] == "outer-req"


@pytest.mark.asyncio
async def test_lower_tier_gets_upgrade_prompt(client: httpx.AsyncClient) -> None:
    headers = await _sign_in(client, "u1", "applicant")
    await _subscribe(client, "u1", "applicant_starter")

    r = await client.post(
        "/v1/access/check",
        headers=headers,
        json={"required_tier": "applicant_professional", "location": "/quiz-me"},
    )
    body = r.json()
    assert body["decision"] == {"allowed": False, "reason": "tier-insufficient"}
    upgrade = body["outcome"]["upgrade"]
    assert body["outcome"]["kind"] == "upgrade"
    assert upgrade["display_name"] == "Professional"
    assert len(upgrade["features"]) == 5
    assert upgrade["upgrade_route"] == "/pricing"


@pytest.mark.asyncio
async def test_canceled_subscription_is_insufficient(client: httpx.AsyncClient) -> None:
    headers = await _sign_in(client, "u2", "applicant")
    await _subscribe(client, "u2", "applicant_premium", status="canceled")

    r = await client.post(
        "/v1/access/check", headers=headers, json={"required_tier": "applicant_starter"}
    )
    assert r.json()["decision"]["reason"] == "tier-insufficient"


@pytest.mark.asyncio
async def test_role_mismatch_redirects_to_own_dashboard(client: httpx.AsyncClient) -> None:
    headers = await _sign_in(client, "r1", "recruiter")
    r = await client.post(
        "/v1/access/check", headers=headers, json={"required_role": "applicant"}
    )
    body = r.json()
    assert body["decision"]["reason"] == "role-mismatch"
    assert body["outcome"]["redirect_to"] == "/recruiter/dashboard"


@pytest.mark.asyncio
async def test_other_family_tier_is_insufficient(client: httpx.AsyncClient) -> None:
    headers = await _sign_in(client, "r1", "recruiter")
    await _subscribe(client, "r1", "recruiter_enterprise")
    r = await client.post(
        "/v1/access/check", headers=headers, json={"required_tier": "applicant_premium"}
    )
    assert r.json()["decision"]["reason"] == "tier-insufficient"


@pytest.mark.asyncio
async def test_malformed_tier_is_rejected(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/access/check", json={"required_tier": "gold"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_route_check_uses_route_table(client: httpx.AsyncClient) -> None:
    headers = await _sign_in(client, "r1", "recruiter")
    await _subscribe(client, "r1", "recruiter_starter")

    r = await client.post(
        "/v1/access/routes/check", headers=headers, json={"path": "/recruiter/analytics"}
    )
    body = r.json()
    assert body["route_pattern"] == "/recruiter/analytics"
    assert body["decision"]["reason"] == "granted"

    r = await client.post(
        "/v1/access/routes/check", headers=headers, json={"path": "/recruiter/talent-pool"}
    )
    body = r.json()
    assert body["decision"]["reason"] == "tier-insufficient"
    assert body["outcome"]["upgrade"]["display_name"] == "Professional Business"


@pytest.mark.asyncio
async def test_public_route_needs_no_session(client: httpx.AsyncClient) -> None:
    r = await client.post("/v1/access/routes/check", json={"path": "/jobs/17"})
    body = r.json()
    assert body["decision"] == {"allowed": True, "reason": "granted"}
    assert body["route_pattern"] is None


@pytest.mark.asyncio
async def test_sign_out_ends_access(client: httpx.AsyncClient) -> None:
    headers = await _sign_in(client, "u1", "applicant")

    r = await client.get("/v1/sessions/current", headers=headers)
    assert r.json() == {"user_id": "u1", "role": "applicant", "subscription": None}

    r = await client.delete("/v1/sessions/current", headers=headers)
    assert r.status_code == 204

    r = await client.get("/v1/sessions/current", headers=headers)
    assert r.status_code == 401

    r = await client.post("/v1/access/check", headers=headers, json={"location": "/profile"})
    assert r.json()["decision"]["reason"] == "unauthenticated"


@pytest.mark.asyncio
async def test_current_session_reports_subscription(client: httpx.AsyncClient) -> None:
    headers = await _sign_in(client, "r1", "recruiter")
    await _subscribe(client, "r1", "recruiter_professional", token_balance=120)

    r = await client.get("/v1/sessions/current", headers=headers)
    assert r.status_code == 200
    assert r.json() == {
        "user_id": "r1",
        "role": "recruiter",
        "subscription": {
            "tier": "recruiter_professional",
            "plan_label": "Recruiter Professional",
            "status": "active",
            "token_balance": 120,
        },
    }

    await _subscribe(client, "r1", "recruiter_professional", status="canceled", token_balance=5)
    sub = (await client.get("/v1/sessions/current", headers=headers)).json()["subscription"]
    assert sub["status"] == "canceled"
    assert sub["token_balance"] == 5


@pytest.mark.asyncio
async def test_tier_catalog_endpoints(client: httpx.AsyncClient) -> None:
    r = await client.get("/v1/tiers")
    assert r.status_code == 200
    assert len(r.json()) == 7

    r = await client.get("/v1/tiers/applicant_ultra")
    body = r.json()
    assert body["display_name"] == "ultra"
    assert body["features"] == []
    assert body["known"] is False

    r = await client.get("/v1/tiers/gold")
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_internal_authority_requires_service_token(client: httpx.AsyncClient) -> None:
    payload = {"user_id": "u1", "required_tier": "applicant_starter"}
    r = await client.post("/internal/v1/subscriptions/check-access", json=payload)
    assert r.status_code == 401

    headers = await _sign_in(client, "u1", "applicant")
    r = await client.post("/internal/v1/subscriptions/check-access", json=payload, headers=headers)
    assert r.status_code == 403


@pytest_asyncio.fixture
async def unreachable_authority_client(tmp_path) -> AsyncIterator[httpx.AsyncClient]:
    settings = Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'down.db'}",
        tier_authority_url="http://127.0.0.1:9",
        tier_authority_timeout_seconds=2.0,
    )
    app: FastAPI = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest.mark.asyncio
async def test_unreachable_authority_fails_closed(
    unreachable_authority_client: httpx.AsyncClient,
) -> None:
    client = unreachable_authority_client
    headers = await _sign_in(client, "u1", "applicant")
    r = await client.post(
        "/v1/access/check",
        headers=headers,
        json={"required_tier": "applicant_starter", "location": "/quiz-me"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["decision"] == {"allowed": False, "reason": "tier-insufficient"}
    assert body["outcome"]["kind"] == "upgrade"


@pytest.mark.asyncio
async def test_dev_routes_are_hidden_in_prod(tmp_path) -> None:
    settings = Settings(
        env="prod",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'prod.db'}",
    )
    app = create_app(settings=settings)
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            r = await c.post("/v1/dev/sign-in", json={"user_id": "u1", "role": "applicant"})
            assert r.status_code == 404
