"""
Atomic JSON text writer.

Provides safe file writes with:
- Atomic temp file + rename to prevent half-written files
- Read-back verification before the swap
- Backup of the previous file, restored if the swap fails
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Result of a write operation."""
    success: bool
    path: Path
    bytes_written: int
    error: Optional[str] = None


@dataclass
class AtomicJsonWriter:
    """
    Safe JSON writer with atomic replace.

    Example:
        writer = AtomicJsonWriter()
        result = writer.write_safe('[{"id": 1}]', Path("data/bet_history_v1.json"))
    """
    temp_suffix: str = ".tmp"
    backup_suffix: str = ".bak"
    create_backup: bool = True
    encoding: str = "utf-8"

    def write_safe(self, payload: str, path: Path) -> WriteResult:
        """
        Atomic write of a JSON document.

        Process:
        1. Write to temp file
        2. Verify temp file parses as JSON and matches the payload
        3. Optionally move the existing file aside as a backup
        4. Atomically rename temp to target

        Args:
            payload: JSON text to write
            path: Target file path

        Returns:
            WriteResult with success status and metadata
        """
        path = Path(path)
        temp_path = path.with_suffix(path.suffix + self.temp_suffix)
        backup_path = path.with_suffix(path.suffix + self.backup_suffix)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            if temp_path.exists():
                temp_path.unlink()

            data = payload.encode(self.encoding)
            temp_path.write_bytes(data)

            # Verify temp file is readable
            written = temp_path.read_text(encoding=self.encoding)
            if written != payload:
                raise ValueError("Verification failed: temp file differs from payload")
            json.loads(written)

            if self.create_backup and path.exists():
                if backup_path.exists():
                    backup_path.unlink()
                path.rename(backup_path)

            temp_path.replace(path)

            if backup_path.exists():
                backup_path.unlink()

            logger.debug(f"Atomic write successful: {len(data)} bytes to {path}")
            return WriteResult(success=True, path=path, bytes_written=len(data))

        except (OSError, ValueError, AttributeError) as e:
            logger.error(f"Atomic write failed for {path}: {e}")

            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError as cleanup_error:
                    logger.warning(f"Could not remove temp file {temp_path}: {cleanup_error}")

            if backup_path.exists() and not path.exists():
                try:
                    backup_path.rename(path)
                    logger.info("Restored backup after failed write")
                except OSError as restore_error:
                    logger.error(f"Could not restore backup {backup_path}: {restore_error}")

            return WriteResult(success=False, path=path, bytes_written=0, error=str(e))
