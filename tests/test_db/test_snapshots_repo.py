"""Tests for snapshot persistence against in-memory SQLite."""

import pytest

from src.db import snapshots as snapshots_repo
from src.db.snapshots import (
    create_snapshot,
    get_latest_snapshot,
    get_user_by_email,
    list_snapshots,
    upsert_user,
)

SNAPSHOT_JSON = {
    "asOf": "2026-10-18T00:00:00Z",
    "holdings": [{"chain": "base", "symbol": "USDC", "quantity": 100, "usdValue": 100}],
}


@pytest.mark.asyncio
async def test_upsert_user_is_idempotent(db_session):
    first = await upsert_user(db_session, "a@example.com")
    second = await upsert_user(db_session, "a@example.com")
    assert first.id == second.id


@pytest.mark.asyncio
async def test_upsert_user_recovers_from_concurrent_insert(db_session, monkeypatch):
    """The first lookup misses a row another request already inserted."""
    existing = await upsert_user(db_session, "race@example.com")

    calls = []

    async def stale_lookup(session, email):
        calls.append(email)
        if len(calls) == 1:
            return None
        return await get_user_by_email(session, email)

    monkeypatch.setattr(snapshots_repo, "get_user_by_email", stale_lookup)
    user = await upsert_user(db_session, "race@example.com")

    assert user.id == existing.id
    assert len(calls) == 2
    # Session is still usable after the rolled-back savepoint
    saved = await create_snapshot(
        db_session, email="race@example.com", stage=2, snapshot_json=SNAPSHOT_JSON,
    )
    assert saved.user_id == existing.id


@pytest.mark.asyncio
async def test_unknown_user(db_session):
    assert await get_user_by_email(db_session, "nobody@example.com") is None
    assert await get_latest_snapshot(db_session, "nobody@example.com") is None
    assert await list_snapshots(db_session, "nobody@example.com", limit=10) == []


@pytest.mark.asyncio
async def test_create_snapshot_creates_user(db_session):
    saved = await create_snapshot(
        db_session,
        email="a@example.com",
        stage=4,
        snapshot_json=SNAPSHOT_JSON,
        suggestions=[{"chain": "base", "type": "NO_ACTION"}],
    )
    assert saved.id is not None
    assert saved.created_at is not None
    assert saved.drift_result is None

    user = await get_user_by_email(db_session, "a@example.com")
    assert user is not None
    assert saved.user_id == user.id


@pytest.mark.asyncio
async def test_latest_and_history_newest_first(db_session):
    for stage in (1, 2, 3):
        await create_snapshot(db_session, email="a@example.com", stage=stage, snapshot_json=SNAPSHOT_JSON)
    await create_snapshot(db_session, email="b@example.com", stage=5, snapshot_json=SNAPSHOT_JSON)

    latest = await get_latest_snapshot(db_session, "a@example.com")
    assert latest is not None
    assert latest.stage == 3
    assert latest.snapshot_json == SNAPSHOT_JSON

    history = await list_snapshots(db_session, "a@example.com", limit=2)
    assert [s.stage for s in history] == [3, 2]
