"""Request/response models — camelCase on the wire, engine dataclasses inside."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.strategy import (
    Allocation,
    Drift,
    Holding,
    HoldingRow,
    PortfolioSnapshot,
    StageDecision,
    StageSignals,
    StageTargets,
    SuggestedAction,
)
from src.strategy.types import MAX_STAGE, MIN_STAGE


class CamelModel(BaseModel):
    # Non-finite floats (NaN, Infinity, 1e309) are rejected as bad input
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


# ── Strategy inputs ────────────────────────────────────────────────────


class HoldingIn(CamelModel):
    chain: Literal["base", "solana"]
    symbol: str
    quantity: float
    usd_value: float


class SnapshotIn(CamelModel):
    as_of: str
    holdings: list[HoldingIn]

    def to_engine(self) -> PortfolioSnapshot:
        return PortfolioSnapshot(
            as_of=self.as_of,
            holdings=tuple(
                Holding(chain=h.chain, symbol=h.symbol, quantity=h.quantity, usd_value=h.usd_value)
                for h in self.holdings
            ),
        )


class StageSignalsIn(CamelModel):
    current_stage: int = Field(ge=MIN_STAGE, le=MAX_STAGE)
    eth_close: float
    sol_close: float
    # to_camel would produce "eth20DHigh"; keep the dashboard's spelling
    eth_20d_high: float = Field(alias="eth20dHigh")
    eth_20d_low: float = Field(alias="eth20dLow")
    sol_20d_high: float = Field(alias="sol20dHigh")
    sol_20d_low: float = Field(alias="sol20dLow")
    pct_change_24h: float = Field(alias="pctChange24h")

    def to_engine(self) -> StageSignals:
        return StageSignals(**self.model_dump())


# ── Strategy outputs ───────────────────────────────────────────────────


class AllocationOut(CamelModel):
    usdc_pct: float
    core_pct: float

    @classmethod
    def from_engine(cls, a: Allocation) -> AllocationOut:
        return cls(usdc_pct=a.usdc_pct, core_pct=a.core_pct)


class StageTargetsOut(CamelModel):
    stage: int
    per_chain: dict[str, AllocationOut]

    @classmethod
    def from_engine(cls, t: StageTargets) -> StageTargetsOut:
        return cls(
            stage=t.stage,
            per_chain={chain.value: AllocationOut.from_engine(a) for chain, a in t.per_chain.items()},
        )


class DriftOut(CamelModel):
    chain: str
    total_usd: float
    actual: AllocationOut
    target: AllocationOut
    drift: AllocationOut

    @classmethod
    def from_engine(cls, d: Drift) -> DriftOut:
        return cls(
            chain=d.chain.value,
            total_usd=d.total_usd,
            actual=AllocationOut.from_engine(d.actual),
            target=AllocationOut.from_engine(d.target),
            drift=AllocationOut.from_engine(d.drift),
        )


class SuggestedActionOut(CamelModel):
    chain: str
    type: str
    reason: str
    core_delta_usd: float
    usdc_delta_usd: float

    @classmethod
    def from_engine(cls, a: SuggestedAction) -> SuggestedActionOut:
        return cls(
            chain=a.chain.value,
            type=a.type.value,
            reason=a.reason,
            core_delta_usd=a.core_delta_usd,
            usdc_delta_usd=a.usdc_delta_usd,
        )


class StageDecisionOut(CamelModel):
    next_stage: int
    reason: str
    applied_rule: str

    @classmethod
    def from_engine(cls, d: StageDecision) -> StageDecisionOut:
        return cls(next_stage=d.next_stage, reason=d.reason, applied_rule=d.applied_rule.value)


class HoldingRowOut(CamelModel):
    key: str
    label: str
    symbol: str
    usd_value: float
    quantity: float
    chain: str | None = None

    @classmethod
    def from_engine(cls, r: HoldingRow) -> HoldingRowOut:
        return cls(
            key=r.key,
            label=r.label,
            symbol=r.symbol,
            usd_value=r.usd_value,
            quantity=r.quantity,
            chain=r.chain,
        )


# ── Snapshots ──────────────────────────────────────────────────────────


class SnapshotCreate(CamelModel):
    email: str = Field(min_length=1, max_length=320)
    stage: int = Field(ge=MIN_STAGE, le=MAX_STAGE)
    snapshot_json: dict[str, Any]
    drift_result: Any = None
    suggestions: Any = None


class SnapshotSummary(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    stage: int


class SnapshotDetail(SnapshotSummary):
    snapshot_json: dict[str, Any]
    drift_result: Any = None
    suggestions: Any = None


class SnapshotCreatedResponse(BaseModel):
    ok: bool = True
    snapshot: SnapshotSummary


class LatestSnapshotResponse(BaseModel):
    ok: bool = True
    snapshot: SnapshotDetail | None


class SnapshotListResponse(BaseModel):
    ok: bool = True
    snapshots: list[SnapshotSummary]
