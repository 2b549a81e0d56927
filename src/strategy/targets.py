"""Stage -> target allocation lookup.

Policy constants from the operating manual. Stage 4 is the default posture
(60% USDC capital / 40% core per chain). Chains are not differentiated yet.
"""

from __future__ import annotations

from types import MappingProxyType

from src.strategy.exceptions import InvalidStageError
from src.strategy.types import CHAINS, MAX_STAGE, MIN_STAGE, Allocation, StageTargets

STAGE_ALLOCATIONS: MappingProxyType[int, Allocation] = MappingProxyType({
    1: Allocation(usdc_pct=85.0, core_pct=15.0),
    2: Allocation(usdc_pct=75.0, core_pct=25.0),
    3: Allocation(usdc_pct=65.0, core_pct=35.0),
    4: Allocation(usdc_pct=60.0, core_pct=40.0),
    5: Allocation(usdc_pct=50.0, core_pct=50.0),
})


def validate_stage(stage: object) -> int:
    """Return ``stage`` as int or raise InvalidStageError.

    Bools are rejected even though they are ints.
    """
    if isinstance(stage, bool) or not isinstance(stage, int):
        raise InvalidStageError(stage)
    if not MIN_STAGE <= stage <= MAX_STAGE:
        raise InvalidStageError(stage)
    return int(stage)


def get_stage_targets(stage: int) -> StageTargets:
    """Target USDC/core percentages for every chain at ``stage``."""
    stage = validate_stage(stage)
    allocation = STAGE_ALLOCATIONS[stage]
    return StageTargets(
        stage=stage,
        per_chain={chain: allocation for chain in CHAINS},
    )
