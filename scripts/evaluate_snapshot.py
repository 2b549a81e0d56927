"""Evaluate a holdings snapshot offline against the stage targets.

Usage:
    .venv/bin/python scripts/evaluate_snapshot.py snapshot.json --stage 4
    .venv/bin/python scripts/evaluate_snapshot.py snapshot.json --signals signals.json --json

``snapshot.json`` is the same document the dashboard posts
(``{"asOf": ..., "holdings": [...]}``); ``signals.json`` matches the
``POST /strategy/stage`` body.
"""

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings  # noqa: E402
from src.api.schemas import (  # noqa: E402
    DriftOut,
    SnapshotIn,
    StageDecisionOut,
    StageSignalsIn,
    SuggestedActionOut,
)
from src.strategy import (  # noqa: E402
    StrategyError,
    compute_drift,
    decide_next_stage,
    suggest_rebalance_actions,
)


def _load_json(path: str) -> dict:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def evaluate(args: argparse.Namespace) -> dict:
    snapshot = SnapshotIn.model_validate(_load_json(args.snapshot)).to_engine()
    stables = settings.stable_symbol_set

    drift = compute_drift(snapshot, args.stage, stable_symbols=stables)
    actions = suggest_rebalance_actions(
        snapshot,
        args.stage,
        trim_threshold_pct=args.trim_threshold,
        refill_only=not args.allow_partial,
        stable_symbols=stables,
    )
    report: dict = {
        "stage": args.stage,
        "drift": [DriftOut.from_engine(d).model_dump(by_alias=True) for d in drift],
        "suggestions": [SuggestedActionOut.from_engine(a).model_dump(by_alias=True) for a in actions],
    }

    if args.signals:
        signals = StageSignalsIn.model_validate(_load_json(args.signals)).to_engine()
        decision = decide_next_stage(signals, crash_threshold_pct=settings.crash_threshold_pct)
        report["stageDecision"] = StageDecisionOut.from_engine(decision).model_dump(by_alias=True)

    return report


def print_report(report: dict) -> None:
    print(f"\n  Stage {report['stage']}")
    print(f"  {'chain':<8} {'total':>12} {'core%':>8} {'target':>8} {'drift':>8}")
    for d in report["drift"]:
        print(
            f"  {d['chain']:<8} {d['totalUsd']:>12,.2f} {d['actual']['corePct']:>7.2f}% "
            f"{d['target']['corePct']:>7.2f}% {d['drift']['corePct']:>+7.2f}pp"
        )

    print("\n  Suggested actions")
    for a in report["suggestions"]:
        print(f"  {a['chain']:<8} {a['type']:<12} core {a['coreDeltaUsd']:>+12,.2f}  {a['reason']}")

    decision = report.get("stageDecision")
    if decision:
        print(f"\n  {decision['appliedRule']}: next stage {decision['nextStage']} — {decision['reason']}")
    print()


def main() -> int:
    parser = argparse.ArgumentParser(description="Evaluate a portfolio snapshot against stage targets")
    parser.add_argument("snapshot", help="Path to snapshot JSON")
    parser.add_argument("--stage", type=int, default=settings.default_stage, help="Stage 1-5")
    parser.add_argument("--trim-threshold", type=float, default=settings.trim_threshold_pct,
                        help="Trim when core exceeds target by more than this many points")
    parser.add_argument("--allow-partial", action="store_true",
                        help="Cap refills at the available USDC balance (refillOnly=false)")
    parser.add_argument("--signals", help="Path to stage signals JSON")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    args = parser.parse_args()

    try:
        report = evaluate(args)
    except (OSError, json.JSONDecodeError, ValidationError, StrategyError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
