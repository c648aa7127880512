"""Home screen view-model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from userstate.application.shared.state_projection import StateProjection
from userstate.application.user.queries.get_user_state import GetUserStateQuery
from userstate.domain.user.models import UserState

DEFAULT_USER_NAME = "User"


@dataclass(frozen=True)
class HomeLoading:
    """No UserState observed yet."""


@dataclass(frozen=True)
class HomeSuccess:
    user_name: str


HomeUiState = Union[HomeLoading, HomeSuccess]


def to_home_ui_state(state: UserState) -> HomeUiState:
    """Project UserState to the home greeting."""
    return HomeSuccess(user_name=state.user_name or DEFAULT_USER_NAME)


class HomeViewModel:
    """Exposes the home screen state as a grace-period projection."""

    def __init__(self, get_user_state: GetUserStateQuery, grace_period_s: float = 5.0) -> None:
        self.ui_state: StateProjection[UserState, HomeUiState] = StateProjection(
            source=get_user_state.execute,
            transform=to_home_ui_state,
            initial=HomeLoading(),
            grace_period_s=grace_period_s,
            name="home",
        )

    def close(self) -> None:
        self.ui_state.close()
