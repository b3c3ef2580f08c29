"""
tests.test_infra

Logging redaction, engine construction and the CLI entrypoint's flag parsing.
"""

from __future__ import annotations

import pytest
from sqlalchemy.pool import StaticPool

from namuh_access.api.__main__ import _parse_args
from namuh_access.db.session import create_engine
from namuh_access.observability.logging import _redact_credentials
from namuh_access.settings import Settings


def test_credentials_are_redacted_from_log_events() -> None:
    event = _redact_credentials(
        None, "info", {"event": "session_signed_in", "access_token": "eyJ...", "user_id": "u1"}
    )
    assert event["access_token"] == "***"
    assert event["user_id"] == "u1"


@pytest.mark.asyncio
async def test_in_memory_sqlite_shares_one_connection() -> None:
    engine = create_engine(Settings(database_url="sqlite+aiosqlite://"))
    try:
        assert isinstance(engine.sync_engine.pool, StaticPool)
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_file_sqlite_uses_default_pool(tmp_path) -> None:
    engine = create_engine(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'x.db'}"))
    try:
        assert not isinstance(engine.sync_engine.pool, StaticPool)
    finally:
        await engine.dispose()


def test_cli_flags_are_optional() -> None:
    args = _parse_args(["--port", "9000"])
    assert args.port == 9000
    assert args.host is None
    assert args.log_level is None
