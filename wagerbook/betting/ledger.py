"""
In-memory wager ledger: placement, deletion and the ordered wager collection.
"""
import logging
import time
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from wagerbook.betting import calculator
from wagerbook.betting.odds import ODDS_CATALOG, OddsCatalog
from wagerbook.betting.wager import Mode, Side, Wager
from wagerbook.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def millisecond_id(last_id: int) -> int:
    """
    Epoch milliseconds, bumped past ``last_id`` when placements share a tick.

    Ids stay unique across restarts without a stored counter: a deleted
    newest id is always below the current time.
    """
    return max(int(time.time() * 1000), last_id + 1)


def parse_stake(stake) -> Optional[Decimal]:
    """Stake as a finite Decimal, or None if it is not a usable number."""
    if isinstance(stake, bool):
        return None
    try:
        value = calculator.to_decimal(stake)
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not value.is_finite():
        return None
    return value


class BetLedger:
    """
    Owns the ordered collection of wagers, newest first.

    Tracks:
    - Wagers in insertion order (newest first, ties broken by insertion)
    - The last id handed out; each new id is strictly greater

    Resolution lives in ``wagerbook.betting.resolver``; grouping and totals
    in ``wagerbook.betting.aggregator``.
    """

    def __init__(
        self,
        catalog: OddsCatalog = ODDS_CATALOG,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[int], int] = millisecond_id,
    ):
        """
        Args:
            catalog: Odds table used to resolve selection indices
            clock: Source of creation timestamps
            id_factory: Maps the last issued id to the next one; must return
                a larger value
        """
        self.catalog = catalog
        self._clock = clock
        self._id_factory = id_factory
        self._wagers: List[Wager] = []
        self._last_id = 0

    @classmethod
    def from_wagers(
        cls,
        wagers: Iterable[Wager],
        catalog: OddsCatalog = ODDS_CATALOG,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[int], int] = millisecond_id,
    ) -> "BetLedger":
        """
        Rebuild a ledger from persisted records, keeping their order.

        Raises:
            ValueError: If two records share an id.
        """
        ledger = cls(catalog=catalog, clock=clock, id_factory=id_factory)
        wagers = list(wagers)
        ids = [w.id for w in wagers]
        if len(set(ids)) != len(ids):
            raise ValueError("Duplicate wager ids in persisted state")
        ledger._wagers = wagers
        ledger._last_id = max(ids, default=0)
        return ledger

    def place(
        self,
        match: str,
        side: Side,
        mode: Mode,
        odds_index: int,
        stake,
    ) -> Wager:
        """
        Record a new wager at the top of the ledger.

        Args:
            match: Contest name; surrounding whitespace is trimmed
            side: Side backed by the bettor (enum or its value, e.g. "SideA")
            mode: Back or Lay (enum or its value)
            odds_index: Selection index into the odds catalog
            stake: Positive amount (Decimal, int, float or numeric string)

        Returns:
            The created wager

        Raises:
            ValidationError: Empty match name or non-positive stake
            IndexError: Odds index outside the catalog
        """
        match = (match or "").strip()
        if not match:
            raise ValidationError("empty match")

        amount = parse_stake(stake)
        if amount is None or amount <= 0:
            raise ValidationError("non-positive stake")

        side, mode = Side(side), Mode(mode)
        entry = self.catalog.entry_at(odds_index)
        win_amount, lose_amount = calculator.compute(mode, amount, entry.value)

        wager = Wager(
            id=self._id_factory(self._last_id),
            created_at=self._clock(),
            match=match,
            side=side,
            mode=mode,
            odds_label=entry.label,
            odds_value=entry.value,
            stake=amount,
            win_amount=win_amount,
            lose_amount=lose_amount,
        )
        self._last_id = wager.id
        self._wagers.insert(0, wager)

        logger.info(
            f"Placed wager #{wager.id}: {match} {wager.side.value} {wager.mode.value} "
            f"{amount} @ {entry.label} (win {win_amount}, lose {lose_amount})"
        )
        return wager

    def delete(self, wager_id: int) -> bool:
        """Remove a wager by id. Unknown ids are ignored."""
        for i, wager in enumerate(self._wagers):
            if wager.id == wager_id:
                del self._wagers[i]
                logger.info(f"Deleted wager #{wager_id}")
                return True
        logger.debug(f"Delete ignored, no wager #{wager_id}")
        return False

    def delete_match(self, match: str) -> int:
        """Remove every wager recorded under this match name."""
        kept = [w for w in self._wagers if w.match != match]
        removed = len(self._wagers) - len(kept)
        self._wagers = kept
        if removed:
            logger.info(f"Deleted {removed} wagers for match '{match}'")
        return removed

    def clear(self) -> int:
        """
        Remove all wagers.

        Destructive: callers must confirm with the user first.
        """
        removed = len(self._wagers)
        self._wagers = []
        logger.info(f"Cleared ledger ({removed} wagers removed)")
        return removed

    def all(self) -> Tuple[Wager, ...]:
        """Snapshot of all wagers, newest first."""
        return tuple(self._wagers)

    def get(self, wager_id: int) -> Wager:
        for wager in self._wagers:
            if wager.id == wager_id:
                return wager
        raise NotFoundError(wager_id)

    def matches(self) -> List[str]:
        """Distinct match names in ledger order."""
        return list(dict.fromkeys(w.match for w in self._wagers))

    def replace_where(
        self,
        predicate: Callable[[Wager], bool],
        transform: Callable[[Wager], Wager],
    ) -> List[Wager]:
        """
        Swap each matching record for its transformed copy, keeping positions.

        Returns:
            The new records, in ledger order
        """
        updated = []
        for i, wager in enumerate(self._wagers):
            if predicate(wager):
                self._wagers[i] = transform(wager)
                updated.append(self._wagers[i])
        return updated

    def __len__(self) -> int:
        return len(self._wagers)

    def __iter__(self) -> Iterator[Wager]:
        return iter(tuple(self._wagers))
