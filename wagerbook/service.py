"""
Wager book session: the ledger wired to persistence and user feedback.

Sequencing:
- state is loaded once, when the book is created, before any operation
- every mutating operation is followed by a full-state save
- validation problems go to the notifier; persistence problems go to the log
"""
import logging
from decimal import Decimal
from typing import Dict, List, Optional, Tuple

from wagerbook.betting import aggregator, resolver, tracker
from wagerbook.betting.calculator import compute
from wagerbook.betting.ledger import BetLedger, parse_stake
from wagerbook.betting.odds import ODDS_CATALOG, OddsCatalog
from wagerbook.betting.wager import Mode, Side, Wager
from wagerbook.core.protocols import Notifier, PersistenceGateway
from wagerbook.exceptions import NotFoundError, PersistenceError, ValidationError
from wagerbook.schema import dump_wagers, load_wagers
from wagerbook.utils.observability import Logger, MetricsRegistry

logger = logging.getLogger(__name__)
events = Logger(__name__)

CLEAR_PROMPT = "Delete the entire wager history?"


class WagerBook:
    """
    Session-scoped owner of a BetLedger.

    Example:
        book = WagerBook(LocalJsonRepository("data/bet_history_v1.json"), ConsoleNotifier())
        wager = book.place("A vs B", Side.SIDE_A, Mode.BACK, 2, 100)
        book.mark_result(wager.id, Side.SIDE_A)
        book.summaries()["A vs B"].total_net  # Decimal("100")
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        notifier: Notifier,
        metrics: Optional[MetricsRegistry] = None,
        catalog: OddsCatalog = ODDS_CATALOG,
    ):
        self.gateway = gateway
        self.notifier = notifier
        self.metrics = metrics or MetricsRegistry()
        self.catalog = catalog
        self._writable = True
        self.ledger = self._load()
        self.metrics.ledger_size.set(len(self.ledger))

    def _load(self) -> BetLedger:
        """Load persisted state; any failure starts an empty ledger."""
        try:
            payload = self.gateway.load()
            if payload is None:
                return BetLedger(catalog=self.catalog)
            ledger = BetLedger.from_wagers(load_wagers(payload), catalog=self.catalog)
        except PersistenceError as e:
            logger.error(f"Could not load ledger, starting empty: {e}")
            self.metrics.persistence_failures.labels(operation="load").inc()
            self._quarantine(str(e))
            return BetLedger(catalog=self.catalog)

        events.log_event("ledger_loaded", wagers=len(ledger))
        return ledger

    def _quarantine(self, reason: str) -> None:
        """Move rejected state aside; if that fails, never save over it."""
        try:
            location = self.gateway.quarantine(reason)
        except PersistenceError as e:
            logger.error(f"Saves disabled for this session: {e}")
            self._writable = False
            return
        if location is not None:
            events.log_warning("ledger_quarantined", location=location, reason=reason)

    def _save(self) -> bool:
        """Persist the post-mutation snapshot. Failures are logged, never raised."""
        self.metrics.ledger_size.set(len(self.ledger))
        ok = False
        if self._writable:
            try:
                ok = self.gateway.save(dump_wagers(self.ledger.all()))
            except PersistenceError as e:
                logger.error(f"Ledger save failed: {e}")

        if not ok:
            self.metrics.persistence_failures.labels(operation="save").inc()
            events.log_warning("ledger_save_failed", wagers=len(self.ledger))
        return ok

    def _reject(self, error: ValidationError) -> None:
        self.metrics.validation_failures.labels(reason=error.reason).inc()
        events.log_warning("wager_rejected", reason=error.reason)
        self.notifier.warn(error.reason)

    def quote(self, mode: Mode, stake, odds_index: int) -> Optional[Tuple[Decimal, Decimal]]:
        """
        Preview ``(win_amount, lose_amount)`` without recording anything.

        Returns None (after warning the user) for a non-positive stake.
        """
        amount = parse_stake(stake)
        if amount is None or amount <= 0:
            self._reject(ValidationError("non-positive stake"))
            return None
        entry = self.catalog.entry_at(odds_index)
        return compute(Mode(mode), amount, entry.value)

    def place(self, match: str, side: Side, mode: Mode, odds_index: int, stake) -> Optional[Wager]:
        """Record a wager; returns None if the input was rejected."""
        try:
            wager = self.ledger.place(match, side, mode, odds_index, stake)
        except ValidationError as e:
            self._reject(e)
            return None

        self.metrics.wagers_placed.labels(mode=wager.mode.value).inc()
        events.log_event(
            "wager_placed",
            wager_id=wager.id,
            match=wager.match,
            stake=str(wager.stake),
            odds=wager.odds_label,
        )
        self._save()
        return wager

    def delete(self, wager_id: int) -> bool:
        removed = self.ledger.delete(wager_id)
        if removed:
            events.log_event("wager_deleted", wager_id=wager_id)
        self._save()
        return removed

    def delete_match(self, match: str) -> int:
        removed = self.ledger.delete_match(match)
        events.log_event("match_deleted", match=match, removed=removed)
        self._save()
        return removed

    def clear(self) -> bool:
        """
        Wipe the ledger after the user confirms.

        Returns:
            True if the ledger was cleared, False if the user declined
        """
        if not self.notifier.confirm_destructive(CLEAR_PROMPT):
            events.log_event("clear_declined", wagers=len(self.ledger))
            return False

        removed = self.ledger.clear()
        events.log_event("ledger_cleared", removed=removed)
        self._save()
        return True

    def mark_result(self, wager_id: int, winning_side: Side) -> Optional[Wager]:
        """Resolve one wager; returns None if the id is unknown."""
        try:
            wager = resolver.mark_result(self.ledger, wager_id, winning_side)
        except NotFoundError as e:
            events.log_warning("wager_not_found", wager_id=wager_id)
            self.notifier.warn(str(e))
            return None

        self.metrics.wagers_resolved.inc()
        events.log_event("wager_resolved", wager_id=wager_id, result=wager.result.value, net=str(wager.net))
        self._save()
        return wager

    def mark_match_result(self, match: str, winning_side: Side) -> int:
        """Resolve every wager on a match; returns how many were updated."""
        updated = resolver.mark_match_result(self.ledger, match, winning_side)
        if updated:
            self.metrics.wagers_resolved.inc(updated)
        events.log_event("match_resolved", match=match, result=Side(winning_side).value, updated=updated)
        self._save()
        return updated

    def wagers(self) -> Tuple[Wager, ...]:
        return self.ledger.all()

    def summaries(self) -> Dict[str, aggregator.MatchSummary]:
        return aggregator.summarize(self.ledger.all())

    def stats(self) -> Dict:
        return tracker.performance_stats(self.ledger.all())

    def matches(self) -> List[str]:
        return self.ledger.matches()
