from __future__ import annotations

from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient

from basicauth.config import Config
from basicauth.core.modules.session.manager import SessionManager
from basicauth.core.modules.session.store import SessionStore
from basicauth.core.modules.user.service import UserService
from basicauth.core.stores.memory import InMemorySessionStore
from basicauth.core.stores.mongo import MongoSessionStore
from basicauth.utils import now

logger = structlog.get_logger(__name__)


class Core:
    """Container providing config, the session store, the session manager and users."""

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    store: SessionStore
    sessions: SessionManager
    users: UserService

    def __init__(self, config: Config, store: SessionStore | None = None, clock: Callable[[], datetime] = now) -> None:
        """Initialize core; sessions go to MongoDB when a database URL is configured."""
        self.config = config
        self.mongo_client = None
        if store is None:
            store = self._create_store(config)
        self.store = store
        self.sessions = SessionManager(store, config.auth_settings(), clock=clock)
        self.users = UserService(config.admin_username, config.admin_password)

    def _create_store(self, config: Config) -> SessionStore:
        if not config.database_url:
            return InMemorySessionStore()
        self.mongo_client = AsyncMongoClient(config.database_url, tz_aware=True)
        database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
        return MongoSessionStore(database.get_collection("sessions"))

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start components that have startup logic."""
        for component in (self.store, self.users):
            if hasattr(component, "on_start"):
                await component.on_start()
        logger.info("core_started", store=type(self.store).__name__)

    async def on_stop(self) -> None:
        """Close the MongoDB connection on shutdown."""
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
