"""Snapshot aggregation and drift computation."""

from __future__ import annotations

import math
from collections.abc import Iterable

from loguru import logger

from src.strategy.targets import get_stage_targets
from src.strategy.types import (
    CHAINS,
    DEFAULT_STABLE_SYMBOLS,
    Allocation,
    Chain,
    ChainSlice,
    Drift,
    PortfolioSnapshot,
)

_CHAIN_BY_VALUE: dict[str, Chain] = {chain.value: chain for chain in CHAINS}


def pct(part: float, whole: float) -> float:
    """``part`` as a percentage of ``whole``; 0 when whole is <= 0 or not finite."""
    if not math.isfinite(whole) or whole <= 0:
        return 0.0
    return part / whole * 100


def slice_by_chain(
    snapshot: PortfolioSnapshot,
    stable_symbols: Iterable[str] = DEFAULT_STABLE_SYMBOLS,
) -> dict[Chain, ChainSlice]:
    """Aggregate holdings into per-chain USDC/core totals.

    Holdings on chains other than base/solana are ignored. Stable detection
    is an exact, case-sensitive match: "usdc" counts as core.
    """
    stables = frozenset(stable_symbols)
    totals = {chain: [0.0, 0.0] for chain in CHAINS}  # usdc, core

    for holding in snapshot.holdings:
        chain = _CHAIN_BY_VALUE.get(holding.chain)
        if chain is None:
            logger.debug(
                f"[STRATEGY] Ignoring {holding.symbol} on unrecognized chain {holding.chain!r}"
            )
            continue
        if holding.symbol in stables:
            totals[chain][0] += holding.usd_value
        else:
            totals[chain][1] += holding.usd_value

    # Derived so that total_usd == usdc_usd + core_usd holds exactly
    return {
        chain: ChainSlice(chain=chain, total_usd=usdc + core, usdc_usd=usdc, core_usd=core)
        for chain, (usdc, core) in totals.items()
    }


def compute_drift(
    snapshot: PortfolioSnapshot,
    stage: int,
    stable_symbols: Iterable[str] = DEFAULT_STABLE_SYMBOLS,
) -> list[Drift]:
    """Actual minus target allocation per chain, base first. Not rounded."""
    targets = get_stage_targets(stage)
    slices = slice_by_chain(snapshot, stable_symbols)

    result = []
    for chain in CHAINS:
        s = slices[chain]
        target = targets.per_chain[chain]
        actual = Allocation(
            usdc_pct=pct(s.usdc_usd, s.total_usd),
            core_pct=pct(s.core_usd, s.total_usd),
        )
        result.append(Drift(
            chain=chain,
            total_usd=s.total_usd,
            actual=actual,
            target=target,
            drift=Allocation(
                usdc_pct=actual.usdc_pct - target.usdc_pct,
                core_pct=actual.core_pct - target.core_pct,
            ),
        ))
    return result
