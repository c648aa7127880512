"""Profile screen view-model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import structlog

from userstate.application.shared.state_projection import StateProjection
from userstate.application.user.commands.account import LogOutCommand
from userstate.application.user.queries.get_user_state import GetUserStateQuery
from userstate.domain.user.models import UserState

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProfileLoading:
    """No UserState observed yet."""


@dataclass(frozen=True)
class ProfileSuccess:
    user_name: Optional[str]
    email: Optional[str]
    authenticated: bool


ProfileUiState = Union[ProfileLoading, ProfileSuccess]


def to_profile_ui_state(state: UserState) -> ProfileUiState:
    return ProfileSuccess(
        user_name=state.user_name,
        email=state.email,
        authenticated=state.authenticated,
    )


class ProfileViewModel:
    """Profile screen: identity display and logout."""

    def __init__(
        self,
        get_user_state: GetUserStateQuery,
        log_out: LogOutCommand,
        grace_period_s: float = 5.0,
    ) -> None:
        self._log_out = log_out
        self.ui_state: StateProjection[UserState, ProfileUiState] = StateProjection(
            source=get_user_state.execute,
            transform=to_profile_ui_state,
            initial=ProfileLoading(),
            grace_period_s=grace_period_s,
            name="profile",
        )

    async def log_out(self) -> None:
        """Clear all user data.

        Raises:
            StorageError: If the durable write fails; state is left unchanged
        """
        logger.info("Logout requested")
        await self._log_out.execute()

    def close(self) -> None:
        self.ui_state.close()
