"""Tests for scripts/evaluate_snapshot.py."""

import importlib.util
import json
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "evaluate_snapshot.py"


@pytest.fixture(scope="module")
def cli():
    spec = importlib.util.spec_from_file_location("evaluate_snapshot", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps({
        "asOf": "2026-10-18T00:00:00Z",
        "holdings": [
            {"chain": "base", "symbol": "USDC", "quantity": 480, "usdValue": 480},
            {"chain": "base", "symbol": "ETH", "quantity": 0.2, "usdValue": 520},
        ],
    }))
    return path


@pytest.fixture
def signals_file(tmp_path):
    path = tmp_path / "signals.json"
    path.write_text(json.dumps({
        "currentStage": 4,
        "ethClose": 2800,
        "solClose": 140,
        "eth20dHigh": 3100,
        "eth20dLow": 2900,
        "sol20dHigh": 150,
        "sol20dLow": 130,
        "pctChange24h": -3,
    }))
    return path


def _run(cli, monkeypatch, *argv) -> int:
    monkeypatch.setattr(sys, "argv", ["evaluate_snapshot.py", *map(str, argv)])
    return cli.main()


def test_json_report(cli, monkeypatch, capsys, snapshot_file, signals_file):
    code = _run(cli, monkeypatch, snapshot_file, "--stage", 4, "--signals", signals_file, "--json")
    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert report["stage"] == 4
    assert report["suggestions"][0]["type"] == "TRIM_CORE"
    assert report["suggestions"][0]["coreDeltaUsd"] == pytest.approx(-120)
    assert report["stageDecision"]["appliedRule"] == "DOWNGRADE_CONFIRMATION"
    assert report["stageDecision"]["nextStage"] == 3


def test_text_report(cli, monkeypatch, capsys, snapshot_file):
    assert _run(cli, monkeypatch, snapshot_file, "--stage", 4) == 0
    out = capsys.readouterr().out
    assert "TRIM_CORE" in out
    assert "Stage 4" in out


def test_invalid_stage_exits_2(cli, monkeypatch, capsys, snapshot_file):
    assert _run(cli, monkeypatch, snapshot_file, "--stage", 9) == 2
    assert "stage must be an integer 1-5" in capsys.readouterr().err


def test_missing_file_exits_2(cli, monkeypatch, tmp_path):
    assert _run(cli, monkeypatch, tmp_path / "missing.json") == 2
