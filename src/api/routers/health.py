"""Health check — no auth required."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from loguru import logger
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_session

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    ok: bool
    db_ok: bool


@router.get("/health", response_model=HealthResponse)
async def health_check(session: AsyncSession = Depends(get_session)) -> HealthResponse:
    """Report process liveness and DB connectivity."""
    db_ok = False
    try:
        await session.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError as e:
        logger.warning(f"[HEALTH] DB check failed: {e}")

    return HealthResponse(ok=True, db_ok=db_ok)
