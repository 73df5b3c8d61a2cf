"""
Local JSON Repository - Default storage implementation.

Stores the serialized ledger as a single JSON file on the local filesystem.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from wagerbook.core.storage.atomic_writer import AtomicJsonWriter
from wagerbook.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class LocalJsonRepository:
    """
    Local filesystem storage for the ledger.

    Layout:
        {data_dir}/
        ├── bet_history_v1.json                          # JSON array of wager records
        └── bet_history_v1.json.corrupt-20240501T180000  # state that failed to load
    """

    def __init__(self, path, create_backup: bool = True):
        self.path = Path(path)
        self.writer = AtomicJsonWriter(create_backup=create_backup)

    def load(self) -> Optional[str]:
        """Read the stored ledger. Missing file means nothing saved yet."""
        if not self.path.exists():
            logger.info(f"No ledger file at {self.path}, starting fresh")
            return None

        try:
            payload = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Could not read {self.path}: {e}") from e

        logger.debug(f"Loaded {len(payload)} chars from {self.path}")
        return payload

    def save(self, payload: str) -> bool:
        """Atomically replace the ledger file."""
        result = self.writer.write_safe(payload, self.path)
        if not result.success:
            logger.warning(f"Ledger save to {self.path} failed: {result.error}")
        return result.success

    def _quarantine_path(self) -> Path:
        stamp = datetime.now().strftime("%Y%m%dT%H%M%S")
        target = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        n = 1
        while target.exists():
            target = self.path.with_name(f"{self.path.name}.corrupt-{stamp}-{n}")
            n += 1
        return target

    def quarantine(self, reason: str) -> Optional[str]:
        """Rename the ledger file to ``<name>.corrupt-<timestamp>``, bytes untouched."""
        if not self.path.exists():
            return None

        target = self._quarantine_path()
        try:
            self.path.rename(target)
        except OSError as e:
            raise PersistenceError(f"Could not move {self.path} aside: {e}") from e

        logger.warning(f"Moved unloadable ledger {self.path} to {target}: {reason}")
        return str(target)


class InMemoryRepository:
    """Keeps the serialized ledger in process memory."""

    def __init__(self, payload: Optional[str] = None):
        self.payload = payload
        self.saves = 0
        self.quarantined: List[str] = []

    def load(self) -> Optional[str]:
        return self.payload

    def save(self, payload: str) -> bool:
        self.payload = payload
        self.saves += 1
        return True

    def quarantine(self, reason: str) -> Optional[str]:
        if self.payload is None:
            return None
        self.quarantined.append(self.payload)
        self.payload = None
        return f"quarantined[{len(self.quarantined) - 1}]"
