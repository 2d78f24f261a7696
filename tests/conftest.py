"""Shared pytest fixtures."""

from datetime import datetime, timedelta

import pytest

from basicauth.core.modules.session.manager import SessionManager
from basicauth.core.modules.session.models import AuthSettings
from basicauth.core.stores.memory import InMemorySessionStore
from basicauth.utils import now


class FakeClock:
    """Controllable replacement for utils.now."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or now()

    def __call__(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta

    def set(self, value: datetime) -> None:
        self.current = value


class RecordingStore(InMemorySessionStore):
    """In-memory store that records every contract call."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[str] = []

    def reset_calls(self) -> None:
        self.calls.clear()

    def count(self, name: str) -> int:
        return self.calls.count(name)

    async def save(self, session):
        self.calls.append("save")
        await super().save(session)

    async def find(self, session_id):
        self.calls.append("find")
        return await super().find(session_id)

    async def update(self, session_id, expires_at):
        self.calls.append("update")
        await super().update(session_id, expires_at)

    async def delete(self, session_id):
        self.calls.append("delete")
        await super().delete(session_id)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def settings():
    return AuthSettings.from_minutes(session_ttl=1440, renew_window=15)


@pytest.fixture
def manager(store, settings, clock):
    return SessionManager(store, settings, clock=clock)
