"""App-level flow routing."""

from userstate.application.router.app_state_router import (
    AppFlow,
    AppState,
    AppStateRouter,
    resolve_app_state,
)
from userstate.application.router.navigation import (
    Route,
    TopLevelDestination,
    start_destination,
)

__all__ = [
    "AppFlow",
    "AppState",
    "AppStateRouter",
    "Route",
    "TopLevelDestination",
    "resolve_app_state",
    "start_destination",
]
