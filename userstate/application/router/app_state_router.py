"""
App-state router.

Derives which top-level flow to show (splash, onboarding, main) from the
shared UserState stream, independently of any screen.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from userstate.application.user.queries.get_user_state import GetUserStateQuery
from userstate.domain.shared.live_stream import LiveStream, Subscription
from userstate.domain.user.models import UserState

logger = structlog.get_logger(__name__)


class AppFlow(str, Enum):
    """Top-level flow selection."""

    UNINITIALIZED = "UNINITIALIZED"  # No UserState yet: splash
    NEEDS_ONBOARDING = "NEEDS_ONBOARDING"
    NEEDS_AUTHENTICATION = "NEEDS_AUTHENTICATION"  # Only with require_authentication
    READY = "READY"


class AppState(BaseModel):
    """Router output: the flow plus the authentication flag for downstream screens."""

    model_config = ConfigDict(frozen=True)

    flow: AppFlow = Field(..., description="Top-level flow to mount")
    authenticated: bool = Field(False, description="Signed-in flag for downstream screens")

    @classmethod
    def uninitialized(cls) -> AppState:
        return cls(flow=AppFlow.UNINITIALIZED)


def resolve_app_state(state: UserState, require_authentication: bool = False) -> AppState:
    """Pure transition function from UserState to AppState.

    By default only `onboarding_complete` selects the flow. With
    `require_authentication`, an onboarded but signed-out user gets
    NEEDS_AUTHENTICATION instead of READY.

    Examples:
        >>> resolve_app_state(UserState.default()).flow
        <AppFlow.NEEDS_ONBOARDING: 'NEEDS_ONBOARDING'>
        >>> resolve_app_state(UserState(onboarding_complete=True)).flow
        <AppFlow.READY: 'READY'>
    """
    if not state.onboarding_complete:
        flow = AppFlow.NEEDS_ONBOARDING
    elif require_authentication and not state.authenticated:
        flow = AppFlow.NEEDS_AUTHENTICATION
    else:
        flow = AppFlow.READY
    return AppState(flow=flow, authenticated=state.authenticated)


class AppStateRouter:
    """
    Long-lived observer of UserState.

    State starts at UNINITIALIZED and is recomputed on every UserState
    emission. There is no terminal state: a logout reset drives the router
    back to NEEDS_ONBOARDING.

    Example:
        >>> router = AppStateRouter(GetUserStateQuery(repository))
        >>> router.start()
        >>> router.state.subscribe(lambda s: print(s.flow))
    """

    def __init__(
        self,
        get_user_state: GetUserStateQuery,
        require_authentication: bool = False,
    ) -> None:
        self._get_user_state = get_user_state
        self.require_authentication = require_authentication
        self.state: LiveStream[AppState] = LiveStream(AppState.uninitialized(), name="app_state")
        self._subscription: Optional[Subscription] = None

    @property
    def current(self) -> AppState:
        return self.state.value  # type: ignore[return-value]

    @property
    def is_running(self) -> bool:
        return self._subscription is not None

    def start(self) -> None:
        """Subscribe to UserState. Calling twice is a no-op."""
        if self._subscription is not None:
            return
        self._subscription = self._get_user_state.execute().subscribe(self._on_user_state)
        logger.info("App state router started", require_authentication=self.require_authentication)

    def close(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    async def wait_for(self, flow: AppFlow) -> AppState:
        """Wait until the router reaches `flow`."""
        future: asyncio.Future[AppState] = asyncio.get_running_loop().create_future()

        def _check(app_state: AppState) -> None:
            if not future.done() and app_state.flow == flow:
                future.set_result(app_state)

        subscription = self.state.subscribe(_check)
        try:
            return await future
        finally:
            subscription.cancel()

    def _on_user_state(self, user_state: UserState) -> None:
        previous = self.current
        updated = resolve_app_state(user_state, self.require_authentication)
        if updated.flow != previous.flow:
            logger.info(
                "App flow changed",
                previous=previous.flow.value,
                flow=updated.flow.value,
            )
        self.state.emit(updated)
