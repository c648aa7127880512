"""Repository implementations."""

from userstate.infrastructure.repository.offline_first_user_data_repository import (
    OfflineFirstUserDataRepository,
)

__all__ = [
    "OfflineFirstUserDataRepository",
]
