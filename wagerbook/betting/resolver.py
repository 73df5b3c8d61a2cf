"""
Outcome resolution for wagers in a ledger.

Resolution always overwrites: calling again with the same side is a no-op in
effect, calling with the other side corrects an earlier mistake.
"""
import dataclasses
import logging
from decimal import Decimal

from wagerbook.betting.ledger import BetLedger
from wagerbook.betting.wager import Side, Wager
from wagerbook.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def settle_net(wager: Wager, winning_side: Side) -> Decimal:
    """Profit (+win_amount) if the backed side won, else loss (-lose_amount)."""
    if wager.side == winning_side:
        return wager.win_amount
    return -wager.lose_amount


def _resolved(wager: Wager, winning_side: Side) -> Wager:
    return dataclasses.replace(
        wager, result=winning_side, net=settle_net(wager, winning_side)
    )


def mark_result(ledger: BetLedger, wager_id: int, winning_side: Side) -> Wager:
    """
    Resolve a single wager.

    Args:
        ledger: Ledger holding the wager
        wager_id: Wager to resolve
        winning_side: Side that won the match

    Returns:
        The updated wager

    Raises:
        NotFoundError: If no wager has this id
    """
    winning_side = Side(winning_side)
    updated = ledger.replace_where(
        lambda w: w.id == wager_id,
        lambda w: _resolved(w, winning_side),
    )
    if not updated:
        raise NotFoundError(wager_id)

    wager = updated[0]
    logger.info(f"Resolved wager #{wager_id}: {winning_side.value} won ({wager.net:+})")
    return wager


def mark_match_result(ledger: BetLedger, match: str, winning_side: Side) -> int:
    """
    Resolve every wager recorded under ``match``.

    The name is compared exactly (case-sensitive). Wagers already resolved
    are overwritten. No matching wagers is not an error.

    Returns:
        Number of wagers updated
    """
    winning_side = Side(winning_side)
    updated = ledger.replace_where(
        lambda w: w.match == match,
        lambda w: _resolved(w, winning_side),
    )
    if updated:
        logger.info(f"Resolved {len(updated)} wagers for '{match}': {winning_side.value} won")
    else:
        logger.debug(f"No wagers for '{match}', nothing to resolve")
    return len(updated)
