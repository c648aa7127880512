"""User state ports (interfaces).

Domain defines the contracts, infrastructure provides the implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from userstate.domain.shared.live_stream import LiveStream
from userstate.domain.user.models import DarkThemeConfig, ThemeBrand, UserState


class PreferenceStorage(ABC):
    """Durable whole-value store for one serialized record.

    Only atomic whole-value read and write are assumed. Field-level
    atomicity is provided by the preference store on top of this port.

    Examples:
        >>> class DictStorage(PreferenceStorage):
        ...     async def read(self):
        ...         return self._record
        ...     async def write(self, record):
        ...         self._record = dict(record)
    """

    @abstractmethod
    async def read(self) -> Optional[dict[str, Any]]:
        """Read the stored record.

        Returns:
            The record, or None when storage is empty

        Raises:
            StorageError: If the read fails
            DecodeError: If the raw data is not a record
        """
        pass

    @abstractmethod
    async def write(self, record: dict[str, Any]) -> None:
        """Replace the stored record atomically.

        Raises:
            StorageError: If the write fails
        """
        pass


class UserDataRepository(ABC):
    """Repository for user data and preferences.

    Stable domain contract in front of the storage mechanism, so an
    alternate backing store can be substituted without touching consumers.
    """

    @property
    @abstractmethod
    def user_state(self) -> LiveStream[UserState]:
        """Live stream of UserState."""
        pass

    @abstractmethod
    async def set_onboarding_complete(self, complete: bool) -> None:
        """Set whether onboarding has been completed."""
        pass

    @abstractmethod
    async def set_authenticated(self, authenticated: bool) -> None:
        """Set whether the user is authenticated."""
        pass

    @abstractmethod
    async def set_user_info(self, user_id: str, user_name: str, email: str) -> None:
        """Set the user identity fields together."""
        pass

    @abstractmethod
    async def set_theme_brand(self, theme_brand: ThemeBrand) -> None:
        """Set the desired theme brand."""
        pass

    @abstractmethod
    async def set_dark_theme_config(self, dark_theme_config: DarkThemeConfig) -> None:
        """Set the desired dark theme config."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Reset all user data to defaults (logout)."""
        pass
