"""
Betting module - odds catalog, payout calculation, ledger, resolution and aggregation.
"""
from wagerbook.betting.wager import Mode, Side, Wager
from wagerbook.betting.odds import ODDS_CATALOG, OddsCatalog, OddsEntry
from wagerbook.betting.ledger import BetLedger
from wagerbook.betting.resolver import mark_match_result, mark_result
from wagerbook.betting.aggregator import MatchSummary, group_by_match, summarize

__all__ = [
    "Mode",
    "Side",
    "Wager",
    "ODDS_CATALOG",
    "OddsCatalog",
    "OddsEntry",
    "BetLedger",
    "mark_result",
    "mark_match_result",
    "MatchSummary",
    "group_by_match",
    "summarize",
]
