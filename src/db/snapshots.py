"""Snapshot persistence — users keyed by email, snapshots newest-first.

Functions flush only; the caller owns the transaction.
"""

from __future__ import annotations

from typing import Any

from loguru import logger
from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.models.snapshot import Snapshot
from src.models.user import User


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def upsert_user(session: AsyncSession, email: str) -> User:
    """Return the user for ``email``, creating it on first sight."""
    user = await get_user_by_email(session, email)
    if user is not None:
        return user
    user = User(email=email)
    try:
        async with session.begin_nested():
            session.add(user)
            await session.flush()
    except IntegrityError:
        # Another request inserted the same email between our read and insert
        existing = await get_user_by_email(session, email)
        if existing is None:
            raise
        logger.debug(f"[SNAPSHOTS] User id={existing.id} created concurrently, reusing")
        return existing
    logger.info(f"[SNAPSHOTS] New user id={user.id}")
    return user


async def create_snapshot(
    session: AsyncSession,
    *,
    email: str,
    stage: int,
    snapshot_json: dict[str, Any],
    drift_result: Any = None,
    suggestions: Any = None,
) -> Snapshot:
    """Persist a snapshot (and optional computed outputs) for ``email``."""
    user = await upsert_user(session, email)
    snapshot = Snapshot(
        user_id=user.id,
        stage=stage,
        snapshot_json=snapshot_json,
        drift_result=drift_result,
        suggestions=suggestions,
    )
    session.add(snapshot)
    await session.flush()
    logger.debug(f"[SNAPSHOTS] Saved snapshot id={snapshot.id} user={user.id} stage={stage}")
    return snapshot


async def get_latest_snapshot(session: AsyncSession, email: str) -> Snapshot | None:
    """Most recent snapshot for ``email``, or None for unknown users."""
    result = await session.execute(
        select(Snapshot)
        .join(User, Snapshot.user_id == User.id)
        .where(User.email == email)
        .order_by(desc(Snapshot.created_at), desc(Snapshot.id))
        .limit(1)
    )
    return result.scalar_one_or_none()


async def list_snapshots(session: AsyncSession, email: str, *, limit: int) -> list[Snapshot]:
    """Up to ``limit`` snapshots for ``email``, newest first."""
    result = await session.execute(
        select(Snapshot)
        .join(User, Snapshot.user_id == User.id)
        .where(User.email == email)
        .order_by(desc(Snapshot.created_at), desc(Snapshot.id))
        .limit(limit)
    )
    return list(result.scalars().all())
