"""
Reference-counted view-state projection.

Maps an upstream live stream through a pure transform into a per-screen
stream, connecting upstream only while someone observes it.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Generic, Optional, TypeVar

import structlog

from userstate.domain.shared.live_stream import LiveStream, Observer, Subscription

logger = structlog.get_logger(__name__)

S = TypeVar("S")
V = TypeVar("V")


class StateProjection(Generic[S, V]):
    """
    Projection of an upstream stream with a teardown grace period.

    Lifecycle:
    - First observer attaches: `source()` is called and subscribed
    - Last observer detaches: a teardown timer of `grace_period_s` starts
      (immediate teardown when no event loop is running)
    - Observer attaches before the timer fires: timer cancelled, cached
      value replayed (no Loading)
    - Timer fires: upstream subscription cancelled, value reset to `initial`

    Example:
        >>> projection = StateProjection(
        ...     source=get_user_state.execute,
        ...     transform=lambda s: HomeSuccess(user_name=s.user_name or "User"),
        ...     initial=HomeLoading(),
        ... )
        >>> sub = projection.subscribe(print)
    """

    def __init__(
        self,
        source: Callable[[], LiveStream[S]],
        transform: Callable[[S], V],
        initial: V,
        grace_period_s: float = 5.0,
        name: str = "projection",
    ) -> None:
        """
        Initialize projection.

        Args:
            source: Returns the upstream stream; called on every (re)connect
            transform: Pure mapping from upstream value to view state
            initial: View state before the first upstream value (Loading)
            grace_period_s: Delay between last detach and upstream teardown
            name: Label used in logs
        """
        if grace_period_s < 0:
            raise ValueError(f"grace_period_s must not be negative: {grace_period_s}")

        self._source = source
        self._transform = transform
        self._initial = initial
        self.grace_period_s = grace_period_s
        self.name = name

        self._state: LiveStream[V] = LiveStream(initial, name=name)
        self._observer_count = 0
        self._upstream: Optional[Subscription] = None
        self._teardown_handle: Optional[asyncio.TimerHandle] = None
        self._closed = False

    @property
    def value(self) -> V:
        return self._state.value  # type: ignore[return-value]

    @property
    def observer_count(self) -> int:
        return self._observer_count

    @property
    def is_connected(self) -> bool:
        return self._upstream is not None

    def subscribe(self, observer: Observer[V]) -> Subscription:
        """Attach an observer; it receives the current view state immediately.

        Raises:
            RuntimeError: If the projection has been closed
        """
        if self._closed:
            raise RuntimeError(f"Projection {self.name} is closed")

        self._cancel_teardown()
        self._observer_count += 1
        downstream = self._state.subscribe(observer)
        if self._upstream is None:
            self._connect()

        def _release() -> None:
            downstream.cancel()
            self._release()

        return Subscription(_release)

    async def first_ready(self, ready: Callable[[V], bool]) -> V:
        """Wait, while subscribed, for the first view state matching `ready`."""
        loop = asyncio.get_running_loop()
        future: asyncio.Future[V] = loop.create_future()

        def _check(value: V) -> None:
            if not future.done() and ready(value):
                future.set_result(value)

        subscription = self.subscribe(_check)
        try:
            return await future
        finally:
            subscription.cancel()

    def close(self) -> None:
        """Tear down immediately and reject further subscribers."""
        self._closed = True
        self._cancel_teardown()
        self._teardown()

    def _connect(self) -> None:
        logger.debug("Projection connecting upstream", projection=self.name)
        self._upstream = self._source().subscribe(self._on_upstream)

    def _on_upstream(self, value: S) -> None:
        self._state.emit(self._transform(value))

    def _release(self) -> None:
        self._observer_count -= 1
        if self._observer_count > 0 or self._closed:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to run the timer on: tear down now
            self._teardown()
            return
        self._teardown_handle = loop.call_later(self.grace_period_s, self._teardown)
        logger.debug(
            "Projection idle, teardown scheduled",
            projection=self.name,
            grace_period_s=self.grace_period_s,
        )

    def _cancel_teardown(self) -> None:
        if self._teardown_handle is not None:
            self._teardown_handle.cancel()
            self._teardown_handle = None

    def _teardown(self) -> None:
        self._teardown_handle = None
        if self._upstream is not None:
            self._upstream.cancel()
            self._upstream = None
            logger.debug("Projection disconnected upstream", projection=self.name)
        self._state.reset(self._initial)
