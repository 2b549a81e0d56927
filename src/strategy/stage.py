"""Stage transition decision from daily market signals.

Rules, first match wins:
1. CRASH_PROTECTION: 24h change <= crash threshold → Stage 1 (from 1-2) or Stage 2.
2. UPGRADE_CONFIRMATION: ETH and SOL both closed above their 20D highs → +1.
3. DOWNGRADE_CONFIRMATION: ETH or SOL closed below its 20D low → -1.
4. NO_CHANGE.
"""

from __future__ import annotations

from src.strategy.targets import validate_stage
from src.strategy.types import MAX_STAGE, MIN_STAGE, StageDecision, StageRule, StageSignals

DEFAULT_CRASH_THRESHOLD_PCT = -12.0


def _clamp_stage(stage: int) -> int:
    return max(MIN_STAGE, min(MAX_STAGE, stage))


def decide_next_stage(
    signals: StageSignals,
    *,
    crash_threshold_pct: float = DEFAULT_CRASH_THRESHOLD_PCT,
) -> StageDecision:
    """Evaluate the transition rules for ``signals.current_stage``."""
    current = validate_stage(signals.current_stage)

    # Crash protection only ever drops to the 1-2 floor
    if signals.pct_change_24h <= crash_threshold_pct:
        next_stage = 1 if current <= 2 else 2
        return StageDecision(
            next_stage=next_stage,
            reason=(
                f"Crash protection triggered (24h change {signals.pct_change_24h:g}%). "
                f"Moving to Stage {next_stage}."
            ),
            applied_rule=StageRule.CRASH_PROTECTION,
        )

    upgrade = (
        signals.eth_close > signals.eth_20d_high
        and signals.sol_close > signals.sol_20d_high
    )
    if upgrade and current < MAX_STAGE:
        return StageDecision(
            next_stage=_clamp_stage(current + 1),
            reason=(
                f"Both ETH ({signals.eth_close:g} > {signals.eth_20d_high:g}) and "
                f"SOL ({signals.sol_close:g} > {signals.sol_20d_high:g}) confirmed above "
                "their 20D highs. Upgrade one stage."
            ),
            applied_rule=StageRule.UPGRADE_CONFIRMATION,
        )

    eth_below = signals.eth_close < signals.eth_20d_low
    sol_below = signals.sol_close < signals.sol_20d_low
    if (eth_below or sol_below) and current > MIN_STAGE:
        broken = []
        if eth_below:
            broken.append(f"ETH {signals.eth_close:g} < {signals.eth_20d_low:g}")
        if sol_below:
            broken.append(f"SOL {signals.sol_close:g} < {signals.sol_20d_low:g}")
        return StageDecision(
            next_stage=_clamp_stage(current - 1),
            reason=(
                f"Confirmed below 20D low ({', '.join(broken)}). Downgrade one stage."
            ),
            applied_rule=StageRule.DOWNGRADE_CONFIRMATION,
        )

    return StageDecision(
        next_stage=current,
        reason="No stage rule triggered.",
        applied_rule=StageRule.NO_CHANGE,
    )
