"""Offline-first user data repository."""

from __future__ import annotations

from userstate.domain.shared.live_stream import LiveStream
from userstate.domain.user.models import DarkThemeConfig, ThemeBrand, UserState
from userstate.domain.user.ports import UserDataRepository
from userstate.infrastructure.datastore.preference_store import PreferenceStore


class OfflineFirstUserDataRepository(UserDataRepository):
    """Implementation of UserDataRepository backed by the local PreferenceStore.

    Pure delegation: reads and writes go one-to-one to the store.

    Examples:
        >>> repo = OfflineFirstUserDataRepository(PreferenceStore(InMemoryPreferenceStorage()))
        >>> await repo.set_onboarding_complete(True)
        >>> repo.user_state.value.onboarding_complete
        True
    """

    def __init__(self, preference_store: PreferenceStore) -> None:
        self._store = preference_store

    @property
    def user_state(self) -> LiveStream[UserState]:
        return self._store.observe()

    async def set_onboarding_complete(self, complete: bool) -> None:
        await self._store.set_onboarding_complete(complete)

    async def set_authenticated(self, authenticated: bool) -> None:
        await self._store.set_authenticated(authenticated)

    async def set_user_info(self, user_id: str, user_name: str, email: str) -> None:
        await self._store.set_user_info(user_id, user_name, email)

    async def set_theme_brand(self, theme_brand: ThemeBrand) -> None:
        await self._store.set_theme_brand(theme_brand)

    async def set_dark_theme_config(self, dark_theme_config: DarkThemeConfig) -> None:
        await self._store.set_dark_theme_config(dark_theme_config)

    async def clear(self) -> None:
        await self._store.clear()
