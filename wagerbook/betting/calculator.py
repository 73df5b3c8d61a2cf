"""Payout mathematics for back and lay wagers.

Every function here is pure: no I/O, no logging, no side effects.

Back mode: the stake is what the bettor wins; the loss is the stake scaled
by the odds. Lay mode is the mirror image: the stake is what the bettor
loses and the win is the stake scaled by the odds.

Scaled amounts are rounded to two decimal places, half away from zero, in
``Decimal`` arithmetic so that ``33.335 * 1`` rounds up to ``33.34`` (binary
floats would store it as ``33.33499...`` and round down).
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple, Union

from wagerbook.betting.wager import Mode

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal, going through str() for floats."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: Number) -> Decimal:
    """Round to two decimal places, half away from zero."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def compute(mode: Mode, stake: Number, odds_value: Number) -> Tuple[Decimal, Decimal]:
    """Compute ``(win_amount, lose_amount)`` for a wager.

    Args:
        mode: ``Mode.BACK`` or ``Mode.LAY``.
        stake: Positive stake.
        odds_value: Positive decimal multiplier from the odds catalog.

    Returns:
        Tuple of win and lose amounts. The unscaled side is the stake as
        given; the scaled side is ``round2(stake * odds_value)``.

    Raises:
        ValueError: If stake or odds_value is not positive. Callers are
            expected to validate user input before getting here.

    Example::

        compute(Mode.BACK, 100, "1.5")  -> (Decimal("100"), Decimal("150.00"))
        compute(Mode.LAY, 100, "1.5")   -> (Decimal("150.00"), Decimal("100"))
    """
    stake = to_decimal(stake)
    odds_value = to_decimal(odds_value)
    if not stake > 0:
        raise ValueError(f"stake must be positive (got {stake})")
    if not odds_value > 0:
        raise ValueError(f"odds_value must be positive (got {odds_value})")

    scaled = round2(stake * odds_value)
    if mode is Mode.BACK:
        return stake, scaled
    if mode is Mode.LAY:
        return scaled, stake
    raise ValueError(f"Unknown wager mode: {mode!r}")
