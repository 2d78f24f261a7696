from datetime import datetime
from typing import Any

import structlog
from pymongo.asynchronous.collection import AsyncCollection

from basicauth.core.modules.session.models import AuthSession

logger = structlog.get_logger(__name__)


class MongoSessionStore:
    """Session store backed by a MongoDB collection.

    Documents are keyed by session id. A TTL index on `expires_at` lets the
    server reap sessions that are never presented again.
    """

    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        self._collection = collection

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("user_id", 1)])
        await self._collection.create_index([("expires_at", 1)], expireAfterSeconds=0)
        logger.debug("mongo_session_store_started", collection=self._collection.name)

    async def save(self, session: AuthSession) -> None:
        await self._collection.insert_one(session.to_mongo())

    async def find(self, session_id: str) -> AuthSession | None:
        doc = await self._collection.find_one({"_id": session_id})
        return AuthSession.model_validate(doc) if doc is not None else None

    async def update(self, session_id: str, expires_at: datetime) -> None:
        await self._collection.update_one({"_id": session_id}, {"$set": {"expires_at": expires_at}})

    async def delete(self, session_id: str) -> None:
        await self._collection.delete_one({"_id": session_id})

    async def find_all(self) -> list[AuthSession]:
        return await AuthSession.list_cursor(self._collection.find().sort("expires_at", 1))

    async def find_by_user(self, user_id: str) -> list[AuthSession]:
        return await AuthSession.list_cursor(self._collection.find({"user_id": user_id}).sort("expires_at", 1))
