"""
Fractional odds catalog.

The catalog is fixed, ordered data: a selection index picks an entry, and
wagers take a snapshot of the entry at creation time.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, List, Sequence, Tuple


@dataclass(frozen=True)
class OddsEntry:
    """A fractional odds label and its decimal multiplier."""
    label: str
    value: Decimal

    def __post_init__(self):
        if isinstance(self.value, (float, int)):
            object.__setattr__(self, "value", Decimal(str(self.value)))
        if self.value <= 0:
            raise ValueError(f"Odds value must be positive (got {self.value})")


class OddsCatalog:
    """
    Immutable ordered table of odds entries.

    Example:
        entry = ODDS_CATALOG.entry_at(2)
        entry.label  # "5/4"
        entry.value  # Decimal("1.25")
    """

    def __init__(self, entries: Sequence[Tuple[str, str]]):
        self._entries: Tuple[OddsEntry, ...] = tuple(
            OddsEntry(label=label, value=Decimal(value)) for label, value in entries
        )

    def entry_at(self, index: int) -> OddsEntry:
        """
        Look up an entry by selection index.

        Raises:
            IndexError: If index is outside the catalog range. Negative
                indices are rejected rather than counted from the end.
        """
        if not 0 <= index < len(self._entries):
            raise IndexError(
                f"Odds index {index} out of range (0..{len(self._entries) - 1})"
            )
        return self._entries[index]

    def index_of(self, label: str) -> int:
        """Selection index of the entry with this label."""
        for i, entry in enumerate(self._entries):
            if entry.label == label:
                return i
        raise KeyError(label)

    def labels(self) -> List[str]:
        return [entry.label for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[OddsEntry]:
        return iter(self._entries)


ODDS_CATALOG = OddsCatalog([
    ("10/10", "1"),
    ("10/9", "1.11"),
    ("5/4", "1.25"),
    ("11/8", "1.37"),
    ("3/2", "1.5"),
    ("5/3", "1.66"),
    ("7/4", "1.75"),
    ("2/1", "2"),
    ("5/2", "2.5"),
    ("7/2", "3.5"),
])
