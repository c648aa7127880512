"""Settings screen view-model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import structlog

from userstate.application.shared.state_projection import StateProjection
from userstate.application.user.commands.update_theme import (
    SetDarkThemeConfigCommand,
    SetThemeBrandCommand,
)
from userstate.application.user.queries.get_user_state import GetUserStateQuery
from userstate.domain.user.models import DarkThemeConfig, ThemeBrand, UserState

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SettingsLoading:
    """No UserState observed yet."""


@dataclass(frozen=True)
class SettingsSuccess:
    theme_brand: ThemeBrand
    dark_theme_config: DarkThemeConfig


SettingsUiState = Union[SettingsLoading, SettingsSuccess]


def to_settings_ui_state(state: UserState) -> SettingsUiState:
    return SettingsSuccess(
        theme_brand=state.theme_brand,
        dark_theme_config=state.dark_theme_config,
    )


class SettingsViewModel:
    """
    Theme settings screen.

    Reads through its projection; writes go to the theme commands and come
    back through the shared UserState stream.
    """

    def __init__(
        self,
        get_user_state: GetUserStateQuery,
        set_theme_brand: SetThemeBrandCommand,
        set_dark_theme_config: SetDarkThemeConfigCommand,
        grace_period_s: float = 5.0,
    ) -> None:
        self._set_theme_brand = set_theme_brand
        self._set_dark_theme_config = set_dark_theme_config
        self.ui_state: StateProjection[UserState, SettingsUiState] = StateProjection(
            source=get_user_state.execute,
            transform=to_settings_ui_state,
            initial=SettingsLoading(),
            grace_period_s=grace_period_s,
            name="settings",
        )

    async def update_theme_brand(self, theme_brand: ThemeBrand) -> None:
        """Persist a new theme brand.

        Raises:
            StorageError: If the durable write fails
        """
        logger.info("Theme brand change requested", theme_brand=theme_brand.value)
        await self._set_theme_brand.execute(theme_brand)

    async def update_dark_theme_config(self, dark_theme_config: DarkThemeConfig) -> None:
        """Persist a new dark theme preference.

        Raises:
            StorageError: If the durable write fails
        """
        logger.info(
            "Dark theme config change requested",
            dark_theme_config=dark_theme_config.value,
        )
        await self._set_dark_theme_config.execute(dark_theme_config)

    def close(self) -> None:
        self.ui_state.close()
