"""
Unit tests for the app-state router and start-destination mapping.
"""

import asyncio

import pytest

from userstate.application.router import (
    AppFlow,
    AppState,
    AppStateRouter,
    Route,
    TopLevelDestination,
    resolve_app_state,
    start_destination,
)
from userstate.application.router.navigation import is_main_flow
from userstate.domain.user.models import UserState


class TestResolveAppState:
    def test_default_state_needs_onboarding(self) -> None:
        assert resolve_app_state(UserState.default()).flow == AppFlow.NEEDS_ONBOARDING

    def test_onboarded_is_ready_even_signed_out(self) -> None:
        state = UserState.default().with_onboarding_complete(True)

        app_state = resolve_app_state(state)

        assert app_state == AppState(flow=AppFlow.READY, authenticated=False)

    def test_authentication_required(self) -> None:
        state = UserState.default().with_onboarding_complete(True)

        assert resolve_app_state(state, require_authentication=True).flow == (
            AppFlow.NEEDS_AUTHENTICATION
        )
        assert resolve_app_state(
            state.with_authenticated(True), require_authentication=True
        ) == AppState(flow=AppFlow.READY, authenticated=True)

    def test_onboarding_wins_over_authentication(self) -> None:
        state = UserState.default().with_authenticated(True)

        assert resolve_app_state(state, require_authentication=True).flow == (
            AppFlow.NEEDS_ONBOARDING
        )


class TestAppStateRouter:
    @pytest.mark.asyncio
    async def test_starts_uninitialized(self, get_user_state) -> None:
        router = AppStateRouter(get_user_state)

        assert router.current == AppState.uninitialized()
        assert not router.is_running

    @pytest.mark.asyncio
    async def test_flow_sequence(self, get_user_state, store) -> None:
        router = AppStateRouter(get_user_state)
        flows = []
        router.state.subscribe(lambda s: flows.append(s.flow))

        router.start()
        await router.wait_for(AppFlow.NEEDS_ONBOARDING)
        await store.set_onboarding_complete(True)
        await store.clear()

        assert flows == [
            AppFlow.UNINITIALIZED,
            AppFlow.NEEDS_ONBOARDING,
            AppFlow.READY,
            AppFlow.NEEDS_ONBOARDING,
        ]
        router.close()

    @pytest.mark.asyncio
    async def test_authentication_flag_forwarded(self, get_user_state, store) -> None:
        router = AppStateRouter(get_user_state)
        router.start()
        await store.set_onboarding_complete(True)

        await store.set_authenticated(True)

        assert router.current == AppState(flow=AppFlow.READY, authenticated=True)
        router.close()

    @pytest.mark.asyncio
    async def test_require_authentication(self, get_user_state, store) -> None:
        router = AppStateRouter(get_user_state, require_authentication=True)
        router.start()
        await store.set_onboarding_complete(True)

        assert router.current.flow == AppFlow.NEEDS_AUTHENTICATION

        await store.set_authenticated(True)
        assert router.current.flow == AppFlow.READY
        router.close()

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, get_user_state) -> None:
        router = AppStateRouter(get_user_state)

        router.start()
        router.start()

        assert get_user_state.execute().subscriber_count == 1
        router.close()

    @pytest.mark.asyncio
    async def test_close_stops_following(self, get_user_state, store) -> None:
        router = AppStateRouter(get_user_state)
        router.start()
        await router.wait_for(AppFlow.NEEDS_ONBOARDING)

        router.close()
        await store.set_onboarding_complete(True)

        assert not router.is_running
        assert router.current.flow == AppFlow.NEEDS_ONBOARDING

    @pytest.mark.asyncio
    async def test_wait_for_current_flow_returns_immediately(self, get_user_state) -> None:
        router = AppStateRouter(get_user_state)

        result = await asyncio.wait_for(router.wait_for(AppFlow.UNINITIALIZED), timeout=1)

        assert result.flow == AppFlow.UNINITIALIZED


class TestNavigation:
    @pytest.mark.parametrize(
        "flow,route",
        [
            (AppFlow.UNINITIALIZED, Route.SPLASH),
            (AppFlow.NEEDS_ONBOARDING, Route.ONBOARDING),
            (AppFlow.NEEDS_AUTHENTICATION, Route.PROFILE),
            (AppFlow.READY, Route.HOME),
        ],
    )
    def test_start_destination(self, flow: AppFlow, route: Route) -> None:
        assert start_destination(AppState(flow=flow)) == route

    def test_top_level_destinations(self) -> None:
        assert [d.route for d in TopLevelDestination] == [
            Route.HOME,
            Route.PROFILE,
            Route.SETTINGS,
        ]
        assert TopLevelDestination.SETTINGS.title == "Settings"

    def test_main_flow_routes(self) -> None:
        assert is_main_flow(Route.HOME)
        assert not is_main_flow(Route.ONBOARDING)
        assert not is_main_flow(Route.SPLASH)
