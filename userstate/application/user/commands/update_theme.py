"""Theme preference commands."""

from dataclasses import dataclass

from userstate.domain.user.models import DarkThemeConfig, ThemeBrand
from userstate.domain.user.ports import UserDataRepository


@dataclass
class SetThemeBrandCommand:
    """Command to change the theme brand.

    Examples:
        >>> await SetThemeBrandCommand(repository).execute(ThemeBrand.ALTERNATE_BRAND)
    """

    repository: UserDataRepository

    async def execute(self, theme_brand: ThemeBrand) -> None:
        await self.repository.set_theme_brand(theme_brand)


@dataclass
class SetDarkThemeConfigCommand:
    """Command to change the dark theme preference."""

    repository: UserDataRepository

    async def execute(self, dark_theme_config: DarkThemeConfig) -> None:
        await self.repository.set_dark_theme_config(dark_theme_config)
