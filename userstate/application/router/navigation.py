"""Navigation destinations and start-destination selection."""

from __future__ import annotations

from enum import Enum

from userstate.application.router.app_state_router import AppFlow, AppState


class Route(str, Enum):
    SPLASH = "splash"
    ONBOARDING = "onboarding"
    HOME = "home"
    PROFILE = "profile"
    SETTINGS = "settings"


class TopLevelDestination(Enum):
    """Destinations shown in the bottom navigation bar of the main flow."""

    HOME = (Route.HOME, "Home")
    PROFILE = (Route.PROFILE, "Profile")
    SETTINGS = (Route.SETTINGS, "Settings")

    def __init__(self, route: Route, title: str) -> None:
        self.route = route
        self.title = title


_START_ROUTES = {
    AppFlow.UNINITIALIZED: Route.SPLASH,
    AppFlow.NEEDS_ONBOARDING: Route.ONBOARDING,
    # Sign-in lives on the profile screen
    AppFlow.NEEDS_AUTHENTICATION: Route.PROFILE,
    AppFlow.READY: Route.HOME,
}


def start_destination(app_state: AppState) -> Route:
    """Route to mount as the root of the navigation graph.

    Examples:
        >>> start_destination(AppState(flow=AppFlow.READY))
        <Route.HOME: 'home'>
    """
    return _START_ROUTES[app_state.flow]


def is_main_flow(route: Route) -> bool:
    """True for routes that belong to the post-onboarding flow."""
    return route in {destination.route for destination in TopLevelDestination}
