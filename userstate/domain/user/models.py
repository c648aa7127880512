"""
User state domain models.

The single persisted aggregate of onboarding, authentication,
identity and theme preferences.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ThemeBrand(str, Enum):
    """Brand palette selected by the user."""

    DEFAULT = "DEFAULT"
    ALTERNATE_BRAND = "ALTERNATE_BRAND"


class DarkThemeConfig(str, Enum):
    """Dark mode preference."""

    FOLLOW_SYSTEM = "FOLLOW_SYSTEM"
    LIGHT = "LIGHT"
    DARK = "DARK"


class UserState(BaseModel):
    """
    Persisted user state.

    Every field has a default, so a UserState is always fully populated.
    Immutable: mutations produce a new instance with `model_copy`.

    Field aliases are the keys of the persisted record.

    Example:
        >>> state = UserState.default()
        >>> state.onboarding_complete
        False
        >>> state.theme_brand
        <ThemeBrand.DEFAULT: 'DEFAULT'>
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    onboarding_complete: bool = Field(
        False, alias="is_onboarding_complete", description="Onboarding finished"
    )
    authenticated: bool = Field(False, alias="is_authenticated", description="User signed in")
    user_id: Optional[str] = Field(None, description="Account identifier")
    user_name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="Account email")
    theme_brand: ThemeBrand = Field(ThemeBrand.DEFAULT, description="Brand palette")
    dark_theme_config: DarkThemeConfig = Field(
        DarkThemeConfig.FOLLOW_SYSTEM, description="Dark mode preference"
    )

    @classmethod
    def default(cls) -> UserState:
        """Aggregate materialized from empty storage."""
        return cls()

    @property
    def has_identity(self) -> bool:
        """True when user_id, user_name and email are all present."""
        return None not in (self.user_id, self.user_name, self.email)

    def with_onboarding_complete(self, complete: bool) -> UserState:
        return self.model_copy(update={"onboarding_complete": complete})

    def with_authenticated(self, authenticated: bool) -> UserState:
        return self.model_copy(update={"authenticated": authenticated})

    def with_user_info(self, user_id: str, user_name: str, email: str) -> UserState:
        """Set the three identity fields together."""
        return self.model_copy(
            update={"user_id": user_id, "user_name": user_name, "email": email}
        )

    def with_theme_brand(self, theme_brand: ThemeBrand) -> UserState:
        return self.model_copy(update={"theme_brand": ThemeBrand(theme_brand)})

    def with_dark_theme_config(self, dark_theme_config: DarkThemeConfig) -> UserState:
        return self.model_copy(
            update={"dark_theme_config": DarkThemeConfig(dark_theme_config)}
        )
