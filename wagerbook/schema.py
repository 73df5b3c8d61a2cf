"""
Serialized ledger schema.

The persisted state is a JSON array of wager records using camelCase field
names. Nullable fields are always present, with ``null`` while a wager is
unresolved. Decimals are written as JSON numbers and read back as
``Decimal`` so stored amounts never pick up float drift.
"""
import json
import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, model_validator

from wagerbook.betting.wager import Mode, Side, Wager
from wagerbook.exceptions import PersistenceError

logger = logging.getLogger(__name__)

# Current schema version
SCHEMA_VERSION = "1.0"


class WagerRecord(BaseModel):
    """
    One persisted wager.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    created_at: datetime = Field(alias="createdAt")
    match: str = Field(min_length=1)
    side: Side
    mode: Mode
    odds_label: str = Field(alias="oddsLabel")
    odds_value: Decimal = Field(alias="oddsValue", gt=0)
    stake: Decimal = Field(gt=0)
    win_amount: Decimal = Field(alias="winAmount", ge=0)
    lose_amount: Decimal = Field(alias="loseAmount", ge=0)
    result: Optional[Side]
    net: Optional[Decimal]

    @model_validator(mode="after")
    def check_resolution(self):
        if (self.result is None) != (self.net is None):
            raise ValueError("result and net must both be null or both be set")
        return self

    @classmethod
    def from_wager(cls, wager: Wager) -> "WagerRecord":
        return cls(
            id=wager.id,
            created_at=wager.created_at,
            match=wager.match,
            side=wager.side,
            mode=wager.mode,
            odds_label=wager.odds_label,
            odds_value=wager.odds_value,
            stake=wager.stake,
            win_amount=wager.win_amount,
            lose_amount=wager.lose_amount,
            result=wager.result,
            net=wager.net,
        )

    def to_wager(self) -> Wager:
        """Build the domain record; raises ValueError on broken invariants."""
        return Wager(
            id=self.id,
            created_at=self.created_at,
            match=self.match,
            side=self.side,
            mode=self.mode,
            odds_label=self.odds_label,
            odds_value=self.odds_value,
            stake=self.stake,
            win_amount=self.win_amount,
            lose_amount=self.lose_amount,
            result=self.result,
            net=self.net,
        )

    def to_json_dict(self) -> dict:
        data = self.model_dump(by_alias=True, mode="python")
        data["createdAt"] = self.created_at.isoformat()
        data["side"] = self.side.value
        data["mode"] = self.mode.value
        data["result"] = self.result.value if self.result is not None else None
        return data


def _encode_decimal(value):
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dump_wagers(wagers: Iterable[Wager]) -> str:
    """Serialize wagers (in the order given) to the JSON ledger format."""
    records = [WagerRecord.from_wager(w).to_json_dict() for w in wagers]
    return json.dumps(records, default=_encode_decimal, ensure_ascii=False, indent=2)


def load_wagers(payload: str) -> List[Wager]:
    """
    Parse the JSON ledger format.

    Raises:
        PersistenceError: If the payload is not valid JSON, is not an array,
            or any record fails validation
    """
    try:
        raw = json.loads(payload, parse_float=Decimal)
    except (TypeError, ValueError, RecursionError) as e:
        raise PersistenceError(f"Unparseable ledger state: {e}") from e

    if not isinstance(raw, list):
        raise PersistenceError(f"Ledger state must be a list, got {type(raw).__name__}")

    wagers = []
    for i, item in enumerate(raw):
        try:
            wagers.append(WagerRecord.model_validate(item).to_wager())
        except (pydantic.ValidationError, ValueError) as e:
            raise PersistenceError(f"Malformed wager record at position {i}: {e}") from e

    ids = [w.id for w in wagers]
    if len(set(ids)) != len(ids):
        raise PersistenceError("Duplicate wager ids in ledger state")

    logger.debug(f"Parsed {len(wagers)} wager records")
    return wagers
