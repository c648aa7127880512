"""
JSON file preference storage.

Durable single-record storage on the local filesystem. Blocking file I/O
is dispatched to a worker thread so the event loop never waits on disk.
"""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Optional

import structlog

from userstate.domain.shared.errors import DecodeError, StorageError
from userstate.domain.user.ports import PreferenceStorage

logger = structlog.get_logger(__name__)


class JsonFilePreferenceStorage(PreferenceStorage):
    """
    File-backed preference storage.

    Storage design:
    - One JSON object per file
    - Writes go to a temp file in the same directory, are fsynced, then
      atomically renamed over the target (no torn records after a crash)
    - A missing file means empty storage

    Example:
        >>> storage = JsonFilePreferenceStorage(Path("/tmp/prefs.json"))
        >>> await storage.write({"is_onboarding_complete": True})
        >>> await storage.read()
        {'is_onboarding_complete': True}
    """

    def __init__(self, path: Path | str) -> None:
        """
        Initialize storage.

        Args:
            path: Target JSON file (parent directories are created on write)
        """
        self.path = Path(path).expanduser()

    async def read(self) -> Optional[dict[str, Any]]:
        """Read the record from disk.

        Raises:
            StorageError: If the file exists but cannot be read
            DecodeError: If the file does not hold a JSON object
        """
        return await asyncio.to_thread(self._read_sync)

    async def write(self, record: dict[str, Any]) -> None:
        """Atomically replace the record on disk.

        Raises:
            StorageError: If the record cannot be written
        """
        await asyncio.to_thread(self._write_sync, record)

    def _read_sync(self) -> Optional[dict[str, Any]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.error("Preferences read failed", path=str(self.path), error=str(e))
            raise StorageError(f"Read from {self.path} failed: {e}") from e

        try:
            record = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Malformed JSON in {self.path}: {e}") from e

        if not isinstance(record, dict):
            raise DecodeError(f"Expected a JSON object in {self.path}")
        return record

    def _write_sync(self, record: dict[str, Any]) -> None:
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(record, fh, sort_keys=True)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.error("Preferences write failed", path=str(self.path), error=str(e))
            raise StorageError(f"Write to {self.path} failed: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
