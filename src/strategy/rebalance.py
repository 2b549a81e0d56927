"""Rebalance suggestions — refill/trim core toward stage targets.

Money only moves between the core bucket and the USDC bucket of a chain,
so every action satisfies ``core_delta_usd == -usdc_delta_usd``.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.strategy.allocation import pct, slice_by_chain
from src.strategy.targets import get_stage_targets
from src.strategy.types import (
    CHAINS,
    DEFAULT_STABLE_SYMBOLS,
    ActionType,
    Allocation,
    ChainSlice,
    PortfolioSnapshot,
    SuggestedAction,
)

# Deltas below this are float noise, not a refill.
REFILL_EPSILON_USD = 0.01


def _no_action(chain_slice: ChainSlice, reason: str) -> SuggestedAction:
    return SuggestedAction(
        chain=chain_slice.chain,
        type=ActionType.NO_ACTION,
        reason=reason,
        core_delta_usd=0.0,
        usdc_delta_usd=0.0,
    )


def _suggest_for_chain(
    s: ChainSlice,
    target: Allocation,
    *,
    trim_threshold_pct: float,
    refill_only: bool,
) -> SuggestedAction:
    if s.total_usd <= 0:
        return _no_action(s, "No holdings detected on this chain.")

    target_core_usd = target.core_pct / 100 * s.total_usd
    delta_core_usd = target_core_usd - s.core_usd  # + buy core, - sell core
    actual_core_pct = pct(s.core_usd, s.total_usd)

    if delta_core_usd > REFILL_EPSILON_USD:
        # refill_only=False caps at the USDC balance, which the clamp below
        # already enforces, so both modes currently buy the same amount.
        max_buy = delta_core_usd if refill_only else min(delta_core_usd, s.usdc_usd)
        buy_usd = max(0.0, min(max_buy, s.usdc_usd))
        if buy_usd <= 0:
            return _no_action(s, "Core is under target but there is no USDC available to refill.")
        return SuggestedAction(
            chain=s.chain,
            type=ActionType.REFILL_CORE,
            reason=(
                f"Core is under target ({actual_core_pct:.2f}% vs {target.core_pct:g}%). "
                "Refill core up to target."
            ),
            core_delta_usd=buy_usd,
            usdc_delta_usd=-buy_usd,
        )

    over_pct = actual_core_pct - target.core_pct
    if over_pct > trim_threshold_pct:
        sell_usd = abs(delta_core_usd)
        return SuggestedAction(
            chain=s.chain,
            type=ActionType.TRIM_CORE,
            reason=(
                f"Core exceeds target by {over_pct:.2f}% (> {trim_threshold_pct:g}%). "
                "Trim back to target."
            ),
            core_delta_usd=-sell_usd,
            usdc_delta_usd=sell_usd,
        )

    return _no_action(
        s,
        f"Core is within drift limits ({actual_core_pct:.2f}% vs target {target.core_pct:g}%).",
    )


def suggest_rebalance_actions(
    snapshot: PortfolioSnapshot,
    stage: int,
    *,
    trim_threshold_pct: float = 5.0,
    refill_only: bool = True,
    stable_symbols: Iterable[str] = DEFAULT_STABLE_SYMBOLS,
) -> list[SuggestedAction]:
    """One suggested action per chain (base, then solana).

    Under target by more than a cent: refill core from USDC, never spending
    more USDC than the chain holds. Over target by more than
    ``trim_threshold_pct`` percentage points: trim core back to target.
    Anything else is NO_ACTION.
    """
    targets = get_stage_targets(stage)
    slices = slice_by_chain(snapshot, stable_symbols)
    return [
        _suggest_for_chain(
            slices[chain],
            targets.per_chain[chain],
            trim_threshold_pct=trim_threshold_pct,
            refill_only=refill_only,
        )
        for chain in CHAINS
    ]
