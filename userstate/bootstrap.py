"""Composition root.

Builds the pipeline storage → store → repository → use cases → router and
hands out view-models. Every collaborator is passed by constructor; nothing
here is a module-level singleton.

Usage:
    container = build_container()          # settings from env / .env
    container.router.start()
    home = container.home_view_model()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import structlog

from userstate.application.router.app_state_router import AppStateRouter
from userstate.application.user.commands import (
    CompleteOnboardingCommand,
    LogOutCommand,
    SaveUserInfoCommand,
    SetAuthenticatedCommand,
    SetDarkThemeConfigCommand,
    SetThemeBrandCommand,
)
from userstate.application.user.queries import GetUserStateQuery
from userstate.application.viewstate.home import HomeViewModel
from userstate.application.viewstate.onboarding import OnboardingViewModel
from userstate.application.viewstate.profile import ProfileViewModel
from userstate.application.viewstate.settings import SettingsViewModel
from userstate.config import Settings, load_settings
from userstate.domain.user.ports import PreferenceStorage, UserDataRepository
from userstate.infrastructure.datastore.factory import create_preference_storage
from userstate.infrastructure.datastore.preference_store import PreferenceStore
from userstate.infrastructure.logging_setup import configure_logging
from userstate.infrastructure.repository.offline_first_user_data_repository import (
    OfflineFirstUserDataRepository,
)

logger = structlog.get_logger(__name__)


@dataclass
class UseCases:
    get_user_state: GetUserStateQuery
    complete_onboarding: CompleteOnboardingCommand
    set_theme_brand: SetThemeBrandCommand
    set_dark_theme_config: SetDarkThemeConfigCommand
    save_user_info: SaveUserInfoCommand
    set_authenticated: SetAuthenticatedCommand
    log_out: LogOutCommand

    @classmethod
    def for_repository(cls, repository: UserDataRepository) -> UseCases:
        return cls(
            get_user_state=GetUserStateQuery(repository),
            complete_onboarding=CompleteOnboardingCommand(repository),
            set_theme_brand=SetThemeBrandCommand(repository),
            set_dark_theme_config=SetDarkThemeConfigCommand(repository),
            save_user_info=SaveUserInfoCommand(repository),
            set_authenticated=SetAuthenticatedCommand(repository),
            log_out=LogOutCommand(repository),
        )


@dataclass
class AppContainer:
    """Wired pipeline for one process."""

    settings: Settings
    store: PreferenceStore
    repository: UserDataRepository
    use_cases: UseCases
    router: AppStateRouter = field(init=False)

    def __post_init__(self) -> None:
        self.router = AppStateRouter(
            self.use_cases.get_user_state,
            require_authentication=self.settings.router_require_authentication,
        )

    def home_view_model(self) -> HomeViewModel:
        return HomeViewModel(self.use_cases.get_user_state, self.settings.grace_period_s)

    def settings_view_model(self) -> SettingsViewModel:
        return SettingsViewModel(
            self.use_cases.get_user_state,
            self.use_cases.set_theme_brand,
            self.use_cases.set_dark_theme_config,
            self.settings.grace_period_s,
        )

    def profile_view_model(self) -> ProfileViewModel:
        return ProfileViewModel(
            self.use_cases.get_user_state,
            self.use_cases.log_out,
            self.settings.grace_period_s,
        )

    def onboarding_view_model(self) -> OnboardingViewModel:
        return OnboardingViewModel(self.use_cases.complete_onboarding)


def build_container(
    settings: Optional[Settings] = None,
    storage: Optional[PreferenceStorage] = None,
) -> AppContainer:
    """Wire the pipeline.

    Args:
        settings: Settings to use (default: `load_settings()`, which also configures logging)
        storage: Storage override, e.g. InMemoryPreferenceStorage in tests

    Returns:
        AppContainer with a router that is not started yet
    """
    if settings is None:
        settings = load_settings()
        configure_logging(settings.log_level)
    if storage is None:
        storage = create_preference_storage(settings)

    store = PreferenceStore(storage)
    repository = OfflineFirstUserDataRepository(store)
    container = AppContainer(
        settings=settings,
        store=store,
        repository=repository,
        use_cases=UseCases.for_repository(repository),
    )
    logger.info(
        "User state pipeline built",
        backend=settings.preferences_backend,
        storage=type(storage).__name__,
    )
    return container
