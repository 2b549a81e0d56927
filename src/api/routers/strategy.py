"""Strategy endpoints. Pure engine calls, no database access."""

from fastapi import APIRouter, Depends, Query, Request

from config.settings import Settings, settings
from src.api.app import limiter
from src.api.dependencies import get_settings
from src.api.schemas import (
    DriftOut,
    HoldingRowOut,
    SnapshotIn,
    StageDecisionOut,
    StageSignalsIn,
    StageTargetsOut,
    SuggestedActionOut,
)
from src.strategy import (
    MAX_STAGE,
    MIN_STAGE,
    BreakdownMode,
    build_holding_rows,
    compute_drift,
    decide_next_stage,
    get_stage_targets,
    suggest_rebalance_actions,
)

router = APIRouter(prefix="/strategy", tags=["strategy"])


@router.get("/targets", response_model=StageTargetsOut)
async def stage_targets(
    stage: int | None = Query(None, ge=MIN_STAGE, le=MAX_STAGE),
    cfg: Settings = Depends(get_settings),
) -> StageTargetsOut:
    """Target USDC/core percentages per chain for a stage."""
    return StageTargetsOut.from_engine(get_stage_targets(stage or cfg.default_stage))


@router.post("/drift", response_model=list[DriftOut])
@limiter.limit(settings.rate_limit)
async def drift(
    request: Request,
    body: SnapshotIn,
    stage: int | None = Query(None, ge=MIN_STAGE, le=MAX_STAGE),
    cfg: Settings = Depends(get_settings),
) -> list[DriftOut]:
    """Actual vs target allocation per chain."""
    result = compute_drift(
        body.to_engine(),
        stage or cfg.default_stage,
        stable_symbols=cfg.stable_symbol_set,
    )
    return [DriftOut.from_engine(d) for d in result]


@router.post("/suggest", response_model=list[SuggestedActionOut])
@limiter.limit(settings.rate_limit)
async def suggest(
    request: Request,
    body: SnapshotIn,
    stage: int | None = Query(None, ge=MIN_STAGE, le=MAX_STAGE),
    trim_threshold_pct: float | None = Query(None, alias="trimThresholdPct", ge=0, allow_inf_nan=False),
    refill_only: bool | None = Query(None, alias="refillOnly"),
    cfg: Settings = Depends(get_settings),
) -> list[SuggestedActionOut]:
    """One refill/trim/no-op suggestion per chain."""
    actions = suggest_rebalance_actions(
        body.to_engine(),
        stage or cfg.default_stage,
        trim_threshold_pct=cfg.trim_threshold_pct if trim_threshold_pct is None else trim_threshold_pct,
        refill_only=cfg.refill_only if refill_only is None else refill_only,
        stable_symbols=cfg.stable_symbol_set,
    )
    return [SuggestedActionOut.from_engine(a) for a in actions]


@router.post("/stage", response_model=StageDecisionOut)
@limiter.limit(settings.rate_limit)
async def next_stage(
    request: Request,
    body: StageSignalsIn,
    cfg: Settings = Depends(get_settings),
) -> StageDecisionOut:
    """Decide the next stage from daily closes, 20D bands and the 24h move."""
    decision = decide_next_stage(body.to_engine(), crash_threshold_pct=cfg.crash_threshold_pct)
    return StageDecisionOut.from_engine(decision)


@router.post("/breakdown", response_model=list[HoldingRowOut])
async def breakdown(
    body: SnapshotIn,
    mode: BreakdownMode = Query(BreakdownMode.BY_CHAIN),
) -> list[HoldingRowOut]:
    """Holdings rows for the dashboard bar chart."""
    return [HoldingRowOut.from_engine(r) for r in build_holding_rows(body.to_engine(), mode)]
