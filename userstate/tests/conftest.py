"""
Shared fixtures for userstate tests.

Storage doubles, a wired store/repository and the use cases built on them.
"""

import asyncio
from typing import Any, Optional

import pytest

from userstate.application.user.commands import (
    CompleteOnboardingCommand,
    LogOutCommand,
    SetDarkThemeConfigCommand,
    SetThemeBrandCommand,
)
from userstate.application.user.queries import GetUserStateQuery
from userstate.domain.shared.errors import StorageError
from userstate.infrastructure.datastore.in_memory_storage import InMemoryPreferenceStorage
from userstate.infrastructure.datastore.preference_store import PreferenceStore
from userstate.infrastructure.repository.offline_first_user_data_repository import (
    OfflineFirstUserDataRepository,
)


# ═══════════════════════════════════════════════════════════
# STORAGE DOUBLES
# ═══════════════════════════════════════════════════════════


class FlakyPreferenceStorage(InMemoryPreferenceStorage):
    """In-memory storage whose reads/writes can be switched to fail."""

    def __init__(self, record: Optional[dict[str, Any]] = None) -> None:
        super().__init__(record)
        self.fail_reads = False
        self.fail_writes = False

    async def read(self) -> Optional[dict[str, Any]]:
        if self.fail_reads:
            raise StorageError("simulated read failure")
        return await super().read()

    async def write(self, record: dict[str, Any]) -> None:
        if self.fail_writes:
            raise StorageError("simulated disk full")
        await super().write(record)


class SlowPreferenceStorage(InMemoryPreferenceStorage):
    """In-memory storage with a delayed write, tracking overlapping writers."""

    def __init__(self, delay_s: float = 0.02) -> None:
        super().__init__()
        self.delay_s = delay_s
        self.active_writers = 0
        self.max_active_writers = 0

    async def write(self, record: dict[str, Any]) -> None:
        self.active_writers += 1
        self.max_active_writers = max(self.max_active_writers, self.active_writers)
        try:
            await asyncio.sleep(self.delay_s)
            await super().write(record)
        finally:
            self.active_writers -= 1


# ═══════════════════════════════════════════════════════════
# PIPELINE FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def storage() -> InMemoryPreferenceStorage:
    """Empty in-memory storage."""
    return InMemoryPreferenceStorage()


@pytest.fixture
def flaky_storage() -> FlakyPreferenceStorage:
    return FlakyPreferenceStorage()


@pytest.fixture
def slow_storage() -> SlowPreferenceStorage:
    return SlowPreferenceStorage()


@pytest.fixture
def store(storage: InMemoryPreferenceStorage) -> PreferenceStore:
    return PreferenceStore(storage)


@pytest.fixture
def repository(store: PreferenceStore) -> OfflineFirstUserDataRepository:
    return OfflineFirstUserDataRepository(store)


@pytest.fixture
def get_user_state(repository: OfflineFirstUserDataRepository) -> GetUserStateQuery:
    return GetUserStateQuery(repository)


@pytest.fixture
def complete_onboarding(repository: OfflineFirstUserDataRepository) -> CompleteOnboardingCommand:
    return CompleteOnboardingCommand(repository)


@pytest.fixture
def set_theme_brand(repository: OfflineFirstUserDataRepository) -> SetThemeBrandCommand:
    return SetThemeBrandCommand(repository)


@pytest.fixture
def set_dark_theme_config(
    repository: OfflineFirstUserDataRepository,
) -> SetDarkThemeConfigCommand:
    return SetDarkThemeConfigCommand(repository)


@pytest.fixture
def log_out(repository: OfflineFirstUserDataRepository) -> LogOutCommand:
    return LogOutCommand(repository)
