"""Snapshot endpoints — save and reload pasted holdings per user."""

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import Settings, settings
from src.api.app import limiter
from src.api.dependencies import get_session, get_settings
from src.api.schemas import (
    LatestSnapshotResponse,
    SnapshotCreate,
    SnapshotCreatedResponse,
    SnapshotDetail,
    SnapshotListResponse,
    SnapshotSummary,
)
from src.db.snapshots import create_snapshot, get_latest_snapshot, list_snapshots

router = APIRouter(prefix="/snapshots", tags=["snapshots"])


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SnapshotCreatedResponse)
@limiter.limit(settings.rate_limit)
async def save_snapshot(
    request: Request,
    body: SnapshotCreate,
    session: AsyncSession = Depends(get_session),
) -> SnapshotCreatedResponse:
    """Persist a snapshot with optional drift/suggestion outputs. Upserts the user."""
    try:
        saved = await create_snapshot(
            session,
            email=body.email,
            stage=body.stage,
            snapshot_json=body.snapshot_json,
            drift_result=body.drift_result,
            suggestions=body.suggestions,
        )
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("[SNAPSHOTS] POST /snapshots failed")
        raise _internal_error()

    return SnapshotCreatedResponse(snapshot=SnapshotSummary.model_validate(saved))


@router.get("/latest", response_model=LatestSnapshotResponse)
async def latest_snapshot(
    email: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
) -> LatestSnapshotResponse:
    """Most recent snapshot for the user, or null."""
    try:
        latest = await get_latest_snapshot(session, email)
    except SQLAlchemyError:
        logger.exception("[SNAPSHOTS] GET /snapshots/latest failed")
        raise _internal_error()

    return LatestSnapshotResponse(
        snapshot=SnapshotDetail.model_validate(latest) if latest else None,
    )


@router.get("", response_model=SnapshotListResponse)
async def recent_snapshots(
    email: str = Query(..., min_length=1),
    limit: int | None = Query(None, ge=1),
    session: AsyncSession = Depends(get_session),
    cfg: Settings = Depends(get_settings),
) -> SnapshotListResponse:
    """Recent snapshot summaries, newest first. ``limit`` is capped at the configured max."""
    limit = min(limit or cfg.snapshots_default_limit, cfg.snapshots_max_limit)
    try:
        rows = await list_snapshots(session, email, limit=limit)
    except SQLAlchemyError:
        logger.exception("[SNAPSHOTS] GET /snapshots failed")
        raise _internal_error()

    return SnapshotListResponse(snapshots=[SnapshotSummary.model_validate(r) for r in rows])
