"""
Live stream primitive.

Replay-latest subject: every new subscriber receives the current value
immediately, then each subsequent distinct value.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable, Generic, List, Optional, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Observer = Callable[[T], None]


class Subscription:
    """Handle returned by `LiveStream.subscribe`.

    Cancelling detaches only this observer. Cancelling twice is a no-op.
    """

    def __init__(self, on_cancel: Callable[[], None]) -> None:
        self._on_cancel: Optional[Callable[[], None]] = on_cancel

    @property
    def cancelled(self) -> bool:
        return self._on_cancel is None

    def cancel(self) -> None:
        if self._on_cancel is None:
            return
        on_cancel, self._on_cancel = self._on_cancel, None
        on_cancel()


class LiveStream(Generic[T]):
    """Observable holder of the latest value.

    Observers are plain callables invoked synchronously on `emit`.
    Consecutive equal values are conflated, so observers only see changes.

    Example:
        >>> stream: LiveStream[int] = LiveStream()
        >>> seen = []
        >>> sub = stream.subscribe(seen.append)
        >>> stream.emit(1)
        >>> stream.emit(1)
        >>> stream.emit(2)
        >>> seen
        [1, 2]
        >>> sub.cancel()
    """

    def __init__(self, initial: Optional[T] = None, name: str = "stream") -> None:
        self._name = name
        self._value: Optional[T] = initial
        self._has_value = initial is not None
        self._observers: List[Observer[T]] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def has_value(self) -> bool:
        return self._has_value

    @property
    def value(self) -> Optional[T]:
        """Latest value, or None before the first emission."""
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: Observer[T]) -> Subscription:
        """Attach an observer and replay the current value to it.

        Args:
            observer: Callable receiving each value

        Returns:
            Subscription used to detach the observer
        """
        self._observers.append(observer)
        if self._has_value:
            self._notify(observer, self._value)  # type: ignore[arg-type]
        return Subscription(lambda: self._detach(observer))

    def emit(self, value: T) -> None:
        """Store `value` and push it to every observer.

        Does nothing when `value` equals the current value.
        """
        if self._has_value and value == self._value:
            return
        self._value = value
        self._has_value = True
        # Copy: observers may cancel themselves while being notified
        for observer in list(self._observers):
            self._notify(observer, value)

    def reset(self, value: Optional[T] = None) -> None:
        """Replace the held value without notifying observers."""
        self._value = value
        self._has_value = value is not None

    async def first(self) -> T:
        """Wait for the first available value."""
        if self._has_value:
            return self._value  # type: ignore[return-value]

        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()

        def _resolve(value: T) -> None:
            if not future.done():
                future.set_result(value)

        subscription = self.subscribe(_resolve)
        try:
            return await future
        finally:
            subscription.cancel()

    async def values(self) -> AsyncIterator[T]:
        """Iterate over the current value and every later one."""
        queue: asyncio.Queue[T] = asyncio.Queue()
        subscription = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            subscription.cancel()

    def _detach(self, observer: Observer[T]) -> None:
        try:
            self._observers.remove(observer)
        except ValueError:
            pass

    def _notify(self, observer: Observer[T], value: T) -> None:
        try:
            observer(value)
        except Exception as e:
            # One failing observer must not starve the others
            logger.error(
                "Stream observer failed",
                stream=self._name,
                observer=getattr(observer, "__qualname__", repr(observer)),
                error=str(e),
                exc_info=True,
            )
