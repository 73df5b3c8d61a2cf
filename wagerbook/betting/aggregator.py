"""
Per-match grouping and totals, derived from a ledger snapshot.

Nothing here is cached: the ledger can change between calls, so every
call recomputes from the wagers it is given.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from wagerbook.betting.wager import Wager


@dataclass(frozen=True)
class MatchSummary:
    """Totals for one match group."""
    match: str
    wagers: tuple
    total_stake: Decimal
    total_net: Decimal
    has_result: bool
    count: int
    latest_placed_at: datetime

    @property
    def settled_net(self):
        """``total_net`` once every wager is resolved, else None."""
        return self.total_net if self.has_result else None


def group_by_match(wagers: Iterable[Wager]) -> Dict[str, List[Wager]]:
    """
    Group wagers by match name.

    Groups appear in first-seen order and each group keeps the relative
    order of the input (newest first for a ledger snapshot).
    """
    groups: Dict[str, List[Wager]] = {}
    for wager in wagers:
        groups.setdefault(wager.match, []).append(wager)
    return groups


def summarize_match(match: str, wagers: Sequence[Wager]) -> MatchSummary:
    """
    Totals for one group.

    ``total_net`` counts unresolved wagers as 0 and is computed regardless of
    ``has_result``; only read it as a final figure when ``has_result`` is True.
    """
    if not wagers:
        raise ValueError(f"No wagers for match '{match}'")
    return MatchSummary(
        match=match,
        wagers=tuple(wagers),
        total_stake=sum((w.stake for w in wagers), Decimal("0")),
        total_net=sum((w.net if w.net is not None else Decimal("0") for w in wagers), Decimal("0")),
        has_result=all(w.is_resolved for w in wagers),
        count=len(wagers),
        latest_placed_at=wagers[0].created_at,
    )


def summarize(wagers: Iterable[Wager]) -> Dict[str, MatchSummary]:
    """Summary per match, in first-seen order."""
    return {
        match: summarize_match(match, group)
        for match, group in group_by_match(wagers).items()
    }
