"""User state commands."""

from userstate.application.user.commands.account import (
    LogOutCommand,
    SaveUserInfoCommand,
    SetAuthenticatedCommand,
)
from userstate.application.user.commands.complete_onboarding import (
    CompleteOnboardingCommand,
)
from userstate.application.user.commands.update_theme import (
    SetDarkThemeConfigCommand,
    SetThemeBrandCommand,
)

__all__ = [
    "CompleteOnboardingCommand",
    "LogOutCommand",
    "SaveUserInfoCommand",
    "SetAuthenticatedCommand",
    "SetDarkThemeConfigCommand",
    "SetThemeBrandCommand",
]
