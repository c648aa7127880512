"""
Unit tests for OfflineFirstUserDataRepository (delegation only).
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from userstate.domain.shared.errors import StorageError
from userstate.domain.shared.live_stream import LiveStream
from userstate.domain.user.models import DarkThemeConfig, ThemeBrand
from userstate.infrastructure.datastore.preference_store import PreferenceStore
from userstate.infrastructure.repository.offline_first_user_data_repository import (
    OfflineFirstUserDataRepository,
)


@pytest.fixture
def mock_store() -> MagicMock:
    store = MagicMock(spec=PreferenceStore)
    for name in (
        "set_onboarding_complete",
        "set_authenticated",
        "set_user_info",
        "set_theme_brand",
        "set_dark_theme_config",
        "clear",
    ):
        setattr(store, name, AsyncMock())
    return store


@pytest.fixture
def repo(mock_store: MagicMock) -> OfflineFirstUserDataRepository:
    return OfflineFirstUserDataRepository(mock_store)


def test_user_state_is_the_store_stream(repo, mock_store: MagicMock) -> None:
    stream: LiveStream = LiveStream()
    mock_store.observe.return_value = stream

    assert repo.user_state is stream


@pytest.mark.asyncio
async def test_mutations_delegate_one_to_one(repo, mock_store: MagicMock) -> None:
    await repo.set_onboarding_complete(True)
    await repo.set_authenticated(False)
    await repo.set_user_info("u1", "Ann", "a@x.com")
    await repo.set_theme_brand(ThemeBrand.ALTERNATE_BRAND)
    await repo.set_dark_theme_config(DarkThemeConfig.DARK)
    await repo.clear()

    mock_store.set_onboarding_complete.assert_awaited_once_with(True)
    mock_store.set_authenticated.assert_awaited_once_with(False)
    mock_store.set_user_info.assert_awaited_once_with("u1", "Ann", "a@x.com")
    mock_store.set_theme_brand.assert_awaited_once_with(ThemeBrand.ALTERNATE_BRAND)
    mock_store.set_dark_theme_config.assert_awaited_once_with(DarkThemeConfig.DARK)
    mock_store.clear.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_errors_propagate_unchanged(repo, mock_store: MagicMock) -> None:
    error = StorageError("disk full")
    mock_store.clear.side_effect = error

    with pytest.raises(StorageError) as exc_info:
        await repo.clear()

    assert exc_info.value is error
