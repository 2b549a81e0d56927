"""Tests for the stage -> target allocation table."""

import pytest

from src.strategy import (
    CHAINS,
    STAGE_ALLOCATIONS,
    Allocation,
    Chain,
    InvalidStageError,
    get_stage_targets,
    validate_stage,
)


@pytest.mark.parametrize(
    "stage,usdc,core",
    [(1, 85, 15), (2, 75, 25), (3, 65, 35), (4, 60, 40), (5, 50, 50)],
)
def test_policy_table(stage, usdc, core):
    targets = get_stage_targets(stage)
    assert targets.stage == stage
    assert targets.per_chain[Chain.BASE] == Allocation(usdc_pct=usdc, core_pct=core)


@pytest.mark.parametrize("stage", [1, 2, 3, 4, 5])
def test_chains_share_targets_and_sum_to_100(stage):
    targets = get_stage_targets(stage)
    assert set(targets.per_chain) == set(CHAINS)
    assert targets.per_chain[Chain.BASE] == targets.per_chain[Chain.SOLANA]
    alloc = targets.per_chain[Chain.BASE]
    assert alloc.usdc_pct + alloc.core_pct == 100


@pytest.mark.parametrize("stage", [0, 6, -1, 100])
def test_out_of_range_stage_rejected(stage):
    with pytest.raises(InvalidStageError):
        get_stage_targets(stage)


@pytest.mark.parametrize("stage", [True, 4.0, "4", None])
def test_non_integer_stage_rejected(stage):
    with pytest.raises(InvalidStageError):
        validate_stage(stage)


def test_invalid_stage_error_is_value_error():
    with pytest.raises(ValueError, match="stage must be an integer 1-5"):
        get_stage_targets(9)


def test_policy_table_is_read_only():
    with pytest.raises(TypeError):
        STAGE_ALLOCATIONS[4] = Allocation(usdc_pct=0, core_pct=100)  # type: ignore[index]


def test_mutating_result_does_not_leak():
    targets = get_stage_targets(4)
    targets.per_chain[Chain.BASE] = Allocation(usdc_pct=0, core_pct=100)
    assert get_stage_targets(4).per_chain[Chain.BASE].core_pct == 40
