"""Tests for the MongoDB session store against a mocked collection."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import bson
import pytest
from bson.codec_options import CodecOptions
from starlette.responses import Response

from basicauth.core.modules.session.models import AuthContext, AuthSession, CookieOptions, SetCookie
from basicauth.core.modules.session.store import SessionStore
from basicauth.core.stores.mongo import MongoSessionStore
from basicauth.web.binding import apply_cookie

EXPIRES_AT = datetime(2025, 1, 2, tzinfo=UTC)
SESSION_ID = "a" * 64


@pytest.fixture
def mock_collection():
    """Create a mock AsyncCollection."""
    collection = MagicMock()
    collection.name = "sessions"
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.create_index = AsyncMock()
    return collection


@pytest.fixture
def mongo_store(mock_collection):
    return MongoSessionStore(mock_collection)


class TestMongoSessionStore:
    def test_satisfies_protocol(self, mongo_store):
        assert isinstance(mongo_store, SessionStore)

    @pytest.mark.asyncio
    async def test_save(self, mongo_store, mock_collection):
        await mongo_store.save(AuthSession(id=SESSION_ID, user_id="user-1", expires_at=EXPIRES_AT))

        mock_collection.insert_one.assert_awaited_once_with(
            {"_id": SESSION_ID, "user_id": "user-1", "expires_at": EXPIRES_AT}
        )

    @pytest.mark.asyncio
    async def test_find(self, mongo_store, mock_collection):
        mock_collection.find_one.return_value = {"_id": SESSION_ID, "user_id": "user-1", "expires_at": EXPIRES_AT}

        session = await mongo_store.find(SESSION_ID)

        mock_collection.find_one.assert_awaited_once_with({"_id": SESSION_ID})
        assert session == AuthSession(id=SESSION_ID, user_id="user-1", expires_at=EXPIRES_AT)

    @pytest.mark.asyncio
    async def test_find_missing(self, mongo_store, mock_collection):
        mock_collection.find_one.return_value = None
        assert await mongo_store.find(SESSION_ID) is None

    @pytest.mark.asyncio
    async def test_update(self, mongo_store, mock_collection):
        await mongo_store.update(SESSION_ID, EXPIRES_AT)

        mock_collection.update_one.assert_awaited_once_with({"_id": SESSION_ID}, {"$set": {"expires_at": EXPIRES_AT}})

    @pytest.mark.asyncio
    async def test_delete(self, mongo_store, mock_collection):
        await mongo_store.delete(SESSION_ID)

        mock_collection.delete_one.assert_awaited_once_with({"_id": SESSION_ID})

    @pytest.mark.asyncio
    async def test_on_start_creates_ttl_index(self, mongo_store, mock_collection):
        await mongo_store.on_start()

        mock_collection.create_index.assert_any_await([("expires_at", 1)], expireAfterSeconds=0)
        mock_collection.create_index.assert_any_await([("user_id", 1)])

    @pytest.mark.asyncio
    async def test_errors_propagate(self, mongo_store, mock_collection):
        mock_collection.find_one.side_effect = TimeoutError("server selection timeout")

        with pytest.raises(TimeoutError):
            await mongo_store.find(SESSION_ID)

    @pytest.mark.asyncio
    async def test_tz_aware_document_sets_cookie(self, mongo_store, mock_collection):
        """Test a record decoded by a tz_aware client yields a cookie expiry Starlette can format."""
        stored = AuthSession(id=SESSION_ID, user_id="user-1", expires_at=EXPIRES_AT).to_mongo()
        mock_collection.find_one.return_value = bson.decode(bson.encode(stored), CodecOptions(tz_aware=True))

        session = await mongo_store.find(SESSION_ID)
        response = Response()
        apply_cookie(response, AuthContext(session, SetCookie("token", session.expires_at)), CookieOptions())

        assert session.expires_at == EXPIRES_AT
        assert session.expires_at.tzinfo is UTC
        assert "expires=Thu, 02 Jan 2025 00:00:00 GMT" in response.headers["set-cookie"]
