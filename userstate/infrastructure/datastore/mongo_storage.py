"""
MongoDB implementation of preference storage.

One document holds the whole preferences record; writes replace it.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from userstate.domain.shared.errors import StorageError
from userstate.domain.user.ports import PreferenceStorage

logger = structlog.get_logger(__name__)


class MongoPreferenceStorage(PreferenceStorage):
    """
    MongoDB preference storage.

    Storage design:
    - Collection: user_preferences (configurable)
    - One document per store, keyed by `_id = document_id`
    - Write = `replace_one(upsert=True)`: atomic whole-document replace

    Example:
        >>> from motor.motor_asyncio import AsyncIOMotorClient
        >>> client = AsyncIOMotorClient("mongodb://localhost:27017")
        >>> storage = MongoPreferenceStorage(client.userstate.user_preferences)
        >>> await storage.write({"is_onboarding_complete": True})
    """

    DEFAULT_DOCUMENT_ID = "user_preferences"

    def __init__(
        self,
        collection: AsyncIOMotorCollection[Any],
        document_id: str = DEFAULT_DOCUMENT_ID,
    ) -> None:
        """
        Initialize storage with a motor collection.

        Args:
            collection: Motor collection holding the preferences document
            document_id: `_id` of the preferences document
        """
        self.collection = collection
        self.document_id = document_id

    async def read(self) -> Optional[dict[str, Any]]:
        """Read the preferences document, without its `_id`."""
        try:
            doc = await self.collection.find_one({"_id": self.document_id})
        except PyMongoError as e:
            logger.error(
                "Preferences read failed",
                document_id=self.document_id,
                error=str(e),
            )
            raise StorageError(f"Read of preferences document failed: {e}") from e

        if doc is None:
            return None

        doc.pop("_id", None)
        return dict(doc)

    async def write(self, record: dict[str, Any]) -> None:
        """Replace the preferences document."""
        document = {**record, "_id": self.document_id}
        try:
            await self.collection.replace_one({"_id": self.document_id}, document, upsert=True)
        except PyMongoError as e:
            logger.error(
                "Preferences write failed",
                document_id=self.document_id,
                error=str(e),
            )
            raise StorageError(f"Write of preferences document failed: {e}") from e
