from src.strategy.allocation import compute_drift, pct, slice_by_chain
from src.strategy.breakdown import BreakdownMode, HoldingRow, build_holding_rows
from src.strategy.exceptions import InvalidStageError, StrategyError
from src.strategy.rebalance import suggest_rebalance_actions
from src.strategy.stage import decide_next_stage
from src.strategy.targets import STAGE_ALLOCATIONS, get_stage_targets, validate_stage
from src.strategy.types import (
    CHAINS,
    DEFAULT_STABLE_SYMBOLS,
    MAX_STAGE,
    MIN_STAGE,
    ActionType,
    Allocation,
    Chain,
    ChainSlice,
    Drift,
    Holding,
    PortfolioSnapshot,
    StageDecision,
    StageRule,
    StageSignals,
    StageTargets,
    SuggestedAction,
)

__all__ = [
    "CHAINS",
    "DEFAULT_STABLE_SYMBOLS",
    "MAX_STAGE",
    "MIN_STAGE",
    "STAGE_ALLOCATIONS",
    "ActionType",
    "Allocation",
    "BreakdownMode",
    "Chain",
    "ChainSlice",
    "Drift",
    "Holding",
    "HoldingRow",
    "InvalidStageError",
    "PortfolioSnapshot",
    "StageDecision",
    "StageRule",
    "StageSignals",
    "StageTargets",
    "StrategyError",
    "SuggestedAction",
    "build_holding_rows",
    "compute_drift",
    "decide_next_stage",
    "get_stage_targets",
    "pct",
    "slice_by_chain",
    "suggest_rebalance_actions",
    "validate_stage",
]
