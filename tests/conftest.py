"""
tests.conftest

Shared fixtures: structured logging, test settings, a running app (lifespan entered)
and an HTTP client.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fakes import LogEvents
from fastapi import FastAPI

from namuh_access.api.app import create_app
from namuh_access.observability.logging import configure_logging
from namuh_access.settings import Settings


@pytest.fixture(scope="session", autouse=True)
def _structured_logging() -> None:
    # Loggers are cached on first use; route them through stdlib before any test logs.
    configure_logging(service_name="namuh-access", level="WARNING")


@pytest.fixture
def log_events(caplog: pytest.LogCaptureFixture) -> LogEvents:
    """Rendered `namuh_access` log events with the given name, parsed from JSON."""
    caplog.set_level(logging.INFO)

    def events(name: str) -> list[dict[str, Any]]:
        parsed = [
            json.loads(record.getMessage())
            for record in caplog.records
            if record.name.startswith("namuh_access")
        ]
        return [e for e in parsed if e.get("event") == name]

    return events


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'namuh_access.db'}",
        jwt_secret="test-secret-" + "x" * 32,
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run the lifespan; enter it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
