"""Preference storage factory for settings-based selection.

Strategy:
- "file": JsonFilePreferenceStorage (default, durable local file)
- "mongodb": MongoPreferenceStorage (shared persistence, requires MONGODB_URI)
- "inmemory": InMemoryPreferenceStorage (tests, transient sessions)
"""

from __future__ import annotations

from typing import Any

import structlog
from motor.motor_asyncio import AsyncIOMotorClient

from userstate.config import Settings
from userstate.domain.shared.errors import ConfigurationError
from userstate.domain.user.ports import PreferenceStorage
from userstate.infrastructure.datastore.file_storage import JsonFilePreferenceStorage
from userstate.infrastructure.datastore.in_memory_storage import InMemoryPreferenceStorage
from userstate.infrastructure.datastore.mongo_storage import MongoPreferenceStorage

logger = structlog.get_logger(__name__)


def create_preference_storage(settings: Settings) -> PreferenceStorage:
    """Create preference storage based on `settings.preferences_backend`.

    Returns:
        PreferenceStorage: The configured storage implementation

    Raises:
        ConfigurationError: If the backend is unknown or mongodb lacks a URI
    """
    backend = settings.preferences_backend

    if backend == "file":
        logger.info("Using file preference storage", path=str(settings.preferences_path))
        return JsonFilePreferenceStorage(settings.preferences_path)

    if backend == "mongodb":
        if not settings.mongodb_uri:
            raise ConfigurationError("MONGODB_URI is required when PREFERENCES_BACKEND=mongodb")

        client: AsyncIOMotorClient[Any] = AsyncIOMotorClient(settings.mongodb_uri)
        collection = client[settings.mongodb_database][settings.preferences_collection]
        logger.info(
            "Using MongoDB preference storage",
            database=settings.mongodb_database,
            collection=settings.preferences_collection,
        )
        return MongoPreferenceStorage(collection, settings.preferences_document_id)

    if backend == "inmemory":
        logger.info("Using in-memory preference storage")
        return InMemoryPreferenceStorage()

    raise ConfigurationError(
        f"Invalid preferences backend: {backend}. Expected 'file', 'mongodb' or 'inmemory'"
    )
