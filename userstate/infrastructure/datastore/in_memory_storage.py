"""In-memory preference storage for testing."""

from __future__ import annotations

import copy
from typing import Any, Optional

from userstate.domain.user.ports import PreferenceStorage


class InMemoryPreferenceStorage(PreferenceStorage):
    """In-memory implementation of the preference storage port.

    Holds a deep copy of the record so callers cannot mutate stored data.
    Useful for unit tests and ephemeral sessions.

    Examples:
        >>> storage = InMemoryPreferenceStorage()
        >>> await storage.write({"is_onboarding_complete": True})
        >>> await storage.read()
        {'is_onboarding_complete': True}
    """

    def __init__(self, record: Optional[dict[str, Any]] = None) -> None:
        """Initialize storage, optionally pre-seeded with a raw record."""
        self._record: Optional[dict[str, Any]] = copy.deepcopy(record)
        self.write_count = 0

    async def read(self) -> Optional[dict[str, Any]]:
        return copy.deepcopy(self._record)

    async def write(self, record: dict[str, Any]) -> None:
        self._record = copy.deepcopy(record)
        self.write_count += 1
