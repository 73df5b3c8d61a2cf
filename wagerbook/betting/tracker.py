"""
Betting performance reporting and P&L analysis over a ledger snapshot.
"""
import polars as pl
from typing import Dict, Iterable, List

from wagerbook.betting.aggregator import summarize
from wagerbook.betting.wager import Wager

WAGER_SCHEMA = {
    "id": pl.Int64,
    "created_at": pl.String,
    "match": pl.String,
    "side": pl.String,
    "mode": pl.String,
    "odds_label": pl.String,
    "odds_value": pl.Float64,
    "stake": pl.Float64,
    "win_amount": pl.Float64,
    "lose_amount": pl.Float64,
    "result": pl.String,
    "net": pl.Float64,
}

MATCH_SCHEMA = {
    "match": pl.String,
    "wagers": pl.Int64,
    "total_stake": pl.Float64,
    "total_net": pl.Float64,
    "has_result": pl.Boolean,
    "latest_placed_at": pl.String,
}


def _row(wager: Wager) -> Dict:
    return {
        "id": wager.id,
        "created_at": wager.created_at.isoformat(),
        "match": wager.match,
        "side": wager.side.value,
        "mode": wager.mode.value,
        "odds_label": wager.odds_label,
        "odds_value": float(wager.odds_value),
        "stake": float(wager.stake),
        "win_amount": float(wager.win_amount),
        "lose_amount": float(wager.lose_amount),
        "result": wager.result.value if wager.result is not None else None,
        "net": float(wager.net) if wager.net is not None else None,
    }


def wagers_frame(wagers: Iterable[Wager]) -> pl.DataFrame:
    """One row per wager, in the order given. Money columns are Float64."""
    return pl.DataFrame([_row(w) for w in wagers], schema=WAGER_SCHEMA)


def match_frame(wagers: Iterable[Wager]) -> pl.DataFrame:
    """One row per match, in ledger order."""
    rows: List[Dict] = [
        {
            "match": s.match,
            "wagers": s.count,
            "total_stake": float(s.total_stake),
            "total_net": float(s.total_net),
            "has_result": s.has_result,
            "latest_placed_at": s.latest_placed_at.isoformat(),
        }
        for s in summarize(wagers).values()
    ]
    return pl.DataFrame(rows, schema=MATCH_SCHEMA)


def performance_stats(wagers: Iterable[Wager]) -> Dict:
    """
    Get performance statistics over resolved wagers.

    Returns:
        Dict with performance metrics; ``{"total_bets": 0, "pending": n}``
        when nothing is resolved yet
    """
    df = wagers_frame(wagers)
    pending = df.filter(pl.col("result").is_null()).height
    settled = df.filter(pl.col("result").is_not_null())

    if settled.is_empty():
        return {"total_bets": 0, "pending": pending}

    total_bets = settled.height
    wins = settled.filter(pl.col("side") == pl.col("result")).height
    total_staked = settled["stake"].sum()
    total_net = settled["net"].sum()

    return {
        "total_bets": total_bets,
        "wins": wins,
        "losses": total_bets - wins,
        "win_rate": wins / total_bets,
        "total_staked": round(total_staked, 2),
        "total_net": round(total_net, 2),
        "roi": round(total_net / total_staked * 100, 2) if total_staked else 0,
        "pending": pending,
    }
