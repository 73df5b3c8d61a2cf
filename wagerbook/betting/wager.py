"""
Wager record and its enumerations.
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class Side(str, Enum):
    """The two mutually exclusive sides of a match."""
    SIDE_A = "SideA"
    SIDE_B = "SideB"


class Mode(str, Enum):
    """Back: stake is the win amount. Lay: stake is the lose amount."""
    BACK = "Back"
    LAY = "Lay"


@dataclass(frozen=True)
class Wager:
    """
    A single recorded bet.

    Records are immutable. Resolution swaps in a new record with
    ``result`` and ``net`` set (see ``wagerbook.betting.resolver``).
    """
    id: int
    created_at: datetime
    match: str
    side: Side
    mode: Mode
    odds_label: str
    odds_value: Decimal
    stake: Decimal
    win_amount: Decimal
    lose_amount: Decimal
    result: Optional[Side] = None
    net: Optional[Decimal] = None

    def __post_init__(self):
        if not self.match or self.match != self.match.strip():
            raise ValueError("match must be a non-empty trimmed string")
        if self.stake <= 0:
            raise ValueError("stake must be positive")
        if self.odds_value <= 0:
            raise ValueError("odds_value must be positive")
        if self.win_amount < 0 or self.lose_amount < 0:
            raise ValueError("win_amount and lose_amount must be non-negative")
        if (self.result is None) != (self.net is None):
            raise ValueError("result and net must be set together")
        if self.result is not None:
            expected = self.win_amount if self.side == self.result else -self.lose_amount
            if self.net != expected:
                raise ValueError(f"net {self.net} inconsistent with result (expected {expected})")

    @property
    def is_resolved(self) -> bool:
        return self.result is not None

    @property
    def won(self) -> Optional[bool]:
        """True/False once resolved, None while pending."""
        if self.result is None:
            return None
        return self.side == self.result
