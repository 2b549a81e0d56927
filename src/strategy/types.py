"""Value types for the rebalancing rules engine.

All types are immutable and constructed fresh per call. Nothing here owns
state or touches storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Chain(StrEnum):
    BASE = "base"
    SOLANA = "solana"


# Iteration order for every per-chain result.
CHAINS: tuple[Chain, ...] = (Chain.BASE, Chain.SOLANA)

MIN_STAGE = 1
MAX_STAGE = 5

DEFAULT_STABLE_SYMBOLS: frozenset[str] = frozenset({"USDC"})


class ActionType(StrEnum):
    REFILL_CORE = "REFILL_CORE"
    TRIM_CORE = "TRIM_CORE"
    NO_ACTION = "NO_ACTION"
    REBALANCE_TO_TARGET = "REBALANCE_TO_TARGET"  # reserved, never emitted yet


class StageRule(StrEnum):
    """Stage transition rules, listed in evaluation priority."""

    CRASH_PROTECTION = "CRASH_PROTECTION"
    UPGRADE_CONFIRMATION = "UPGRADE_CONFIRMATION"
    DOWNGRADE_CONFIRMATION = "DOWNGRADE_CONFIRMATION"
    NO_CHANGE = "NO_CHANGE"


@dataclass(frozen=True)
class Holding:
    """One asset position on one chain.

    ``chain`` stays a plain string: holdings on chains outside ``CHAINS``
    are accepted and ignored by the aggregation step.
    """

    chain: str
    symbol: str
    quantity: float
    usd_value: float


@dataclass(frozen=True)
class PortfolioSnapshot:
    as_of: str  # ISO-8601
    holdings: tuple[Holding, ...]


@dataclass(frozen=True)
class ChainSlice:
    chain: Chain
    total_usd: float = 0.0
    usdc_usd: float = 0.0
    core_usd: float = 0.0


@dataclass(frozen=True)
class Allocation:
    usdc_pct: float
    core_pct: float


@dataclass(frozen=True)
class StageTargets:
    stage: int
    per_chain: dict[Chain, Allocation]


@dataclass(frozen=True)
class Drift:
    """Actual vs target allocation. Positive ``drift.core_pct`` = over-allocated to core."""

    chain: Chain
    total_usd: float
    actual: Allocation
    target: Allocation
    drift: Allocation


@dataclass(frozen=True)
class SuggestedAction:
    chain: Chain
    type: ActionType
    reason: str
    core_delta_usd: float  # + buy core with USDC, - sell core to USDC
    usdc_delta_usd: float  # always -core_delta_usd


@dataclass(frozen=True)
class StageSignals:
    """Market inputs for a stage transition. Bands are computed upstream."""

    current_stage: int
    eth_close: float
    sol_close: float
    eth_20d_high: float
    eth_20d_low: float
    sol_20d_high: float
    sol_20d_low: float
    pct_change_24h: float  # negative = down, e.g. -12.3


@dataclass(frozen=True)
class StageDecision:
    next_stage: int
    reason: str
    applied_rule: StageRule
