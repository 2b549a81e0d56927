"""Chart-ready holdings breakdown for the dashboard bar chart.

Display-only aggregation: unlike ``slice_by_chain`` it keeps holdings on any
chain, since the chart shows whatever the user pasted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum

from src.strategy.types import PortfolioSnapshot


class BreakdownMode(StrEnum):
    BY_CHAIN = "by_chain"  # one row per SYMBOL@chain
    MERGED = "merged"  # one row per symbol across chains


@dataclass(frozen=True)
class HoldingRow:
    key: str
    label: str
    symbol: str
    usd_value: float
    quantity: float
    chain: str | None = None


def _is_plottable(usd_value: float) -> bool:
    return math.isfinite(usd_value) and usd_value > 0


def build_holding_rows(
    snapshot: PortfolioSnapshot,
    mode: BreakdownMode = BreakdownMode.BY_CHAIN,
) -> list[HoldingRow]:
    """Rows sorted by USD value, largest first.

    Symbols and chain names are whitespace-trimmed. Rows with an empty
    symbol or a non-positive USD value are dropped.
    """
    mode = BreakdownMode(mode)

    if mode is BreakdownMode.MERGED:
        merged: dict[str, list[float]] = {}
        for h in snapshot.holdings:
            symbol = h.symbol.strip()
            if not symbol or not _is_plottable(h.usd_value):
                continue
            acc = merged.setdefault(symbol, [0.0, 0.0])
            acc[0] += h.usd_value
            acc[1] += h.quantity
        rows = [
            HoldingRow(key=symbol, label=symbol, symbol=symbol, usd_value=usd, quantity=qty)
            for symbol, (usd, qty) in merged.items()
        ]
    else:
        rows = []
        for h in snapshot.holdings:
            symbol = h.symbol.strip()
            chain = h.chain.strip()
            if not symbol or not _is_plottable(h.usd_value):
                continue
            label = f"{symbol}@{chain}"
            rows.append(HoldingRow(
                key=label,
                label=label,
                symbol=symbol,
                usd_value=h.usd_value,
                quantity=h.quantity,
                chain=chain,
            ))

    rows.sort(key=lambda r: r.usd_value, reverse=True)
    return rows
