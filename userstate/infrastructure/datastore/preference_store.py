"""
Preference store.

Durable UserState persistence exposed as a live stream. The only writer of
durable state: every mutation is a serialized read-modify-write whose result
is committed to storage before it is emitted.
"""

from __future__ import annotations

import asyncio
import functools
from typing import Callable, Optional

import structlog

from userstate.domain.shared.errors import DecodeError, StorageError
from userstate.domain.shared.live_stream import LiveStream
from userstate.domain.user.codec import decode_user_state, encode_user_state
from userstate.domain.user.models import DarkThemeConfig, ThemeBrand, UserState
from userstate.domain.user.ports import PreferenceStorage

logger = structlog.get_logger(__name__)

Transform = Callable[[UserState], UserState]


class PreferenceStore:
    """
    Live, durable UserState store.

    Guarantees:
    - `observe()` never yields a partial state; empty or undecodable storage
      yields `UserState.default()`
    - Mutations are serialized by one lock, so concurrent field updates
      never clobber each other
    - A mutation emits only after its durable write succeeded; a failed
      write raises StorageError and the stream keeps the last committed value
    - Fallback defaults shown after a failed initial read are never written
      back; the next mutation re-reads storage first
    - Once issued, a mutation runs to completion even if its caller is cancelled

    Example:
        >>> store = PreferenceStore(InMemoryPreferenceStorage())
        >>> stream = store.observe()
        >>> await store.set_theme_brand(ThemeBrand.ALTERNATE_BRAND)
        >>> stream.value.theme_brand
        <ThemeBrand.ALTERNATE_BRAND: 'ALTERNATE_BRAND'>
    """

    def __init__(self, storage: PreferenceStorage) -> None:
        """
        Initialize store.

        Args:
            storage: Durable whole-value storage backend
        """
        self._storage = storage
        self._lock = asyncio.Lock()
        self._stream: LiveStream[UserState] = LiveStream(name="user_state")
        self._loaded = False
        # Stream shows fallback defaults, not committed state
        self._degraded = False
        self._load_task: Optional[asyncio.Task[None]] = None

    # ------------------------------------------------------------------ #
    #  Read side                                                          #
    # ------------------------------------------------------------------ #

    def observe(self) -> LiveStream[UserState]:
        """Live stream of UserState.

        The first call schedules the initial durable read on the running
        event loop; subscribers receive the value as soon as it is loaded.
        """
        if not self._loaded and self._load_task is None:
            self._load_task = asyncio.get_running_loop().create_task(self._load())
        return self._stream

    async def current(self) -> UserState:
        """Latest committed UserState, loading it first if needed."""
        if not self._loaded:
            await self._load()
        return self._stream.value  # type: ignore[return-value]

    async def _load(self) -> None:
        async with self._lock:
            if self._loaded:
                return
            try:
                state = await self._read_committed()
            except StorageError as e:
                # Stream must always produce a value
                logger.warning("Initial preferences read failed, using defaults", error=str(e))
                state = UserState.default()
                self._degraded = True
            self._loaded = True
            self._stream.emit(state)
            logger.info("User state loaded", onboarding_complete=state.onboarding_complete)

    async def _read_committed(self) -> UserState:
        """Read and decode storage. Caller holds the lock.

        Raises:
            StorageError: If storage cannot be read
        """
        try:
            record = await self._storage.read()
            if record is None:
                logger.debug("Preferences storage empty, materializing defaults")
                return UserState.default()
            return decode_user_state(record)
        except DecodeError as e:
            logger.warning("Stored preferences undecodable, using defaults", error=str(e))
            return UserState.default()

    # ------------------------------------------------------------------ #
    #  Write side                                                         #
    # ------------------------------------------------------------------ #

    async def set_onboarding_complete(self, complete: bool) -> None:
        await self._mutate("set_onboarding_complete", lambda s: s.with_onboarding_complete(complete))

    async def set_authenticated(self, authenticated: bool) -> None:
        await self._mutate("set_authenticated", lambda s: s.with_authenticated(authenticated))

    async def set_user_info(self, user_id: str, user_name: str, email: str) -> None:
        await self._mutate(
            "set_user_info", lambda s: s.with_user_info(user_id, user_name, email)
        )

    async def set_theme_brand(self, theme_brand: ThemeBrand) -> None:
        await self._mutate("set_theme_brand", lambda s: s.with_theme_brand(theme_brand))

    async def set_dark_theme_config(self, dark_theme_config: DarkThemeConfig) -> None:
        await self._mutate(
            "set_dark_theme_config", lambda s: s.with_dark_theme_config(dark_theme_config)
        )

    async def clear(self) -> None:
        """Reset the whole aggregate to defaults in one transition."""
        await self._mutate("clear", lambda _: UserState.default())

    async def _mutate(self, operation: str, transform: Transform) -> None:
        # Shielded: cancelling the caller does not abort the write
        task = asyncio.create_task(self._apply(operation, transform))
        task.add_done_callback(functools.partial(self._log_failure, operation))
        await asyncio.shield(task)

    @staticmethod
    def _log_failure(operation: str, task: asyncio.Task[None]) -> None:
        # Retrieves the exception even when the caller was cancelled
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("User state mutation failed", operation=operation, error=str(error))

    async def _apply(self, operation: str, transform: Transform) -> None:
        async with self._lock:
            committed = self._loaded and not self._degraded
            if committed:
                current = self._stream.value
            else:
                current = await self._read_committed()
            assert current is not None

            updated = transform(current)
            if committed and updated == current:
                logger.debug("User state unchanged, skipping write", operation=operation)
                return

            await self._storage.write(encode_user_state(updated))

            self._loaded = True
            self._degraded = False
            self._stream.emit(updated)
            logger.info("User state committed", operation=operation)
