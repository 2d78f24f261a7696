from datetime import datetime

from basicauth.core.modules.session.models import AuthSession


class InMemorySessionStore:
    """Session store backed by a dict; state is lost when the process exits."""

    def __init__(self) -> None:
        self._sessions: dict[str, AuthSession] = {}

    async def save(self, session: AuthSession) -> None:
        if session.id in self._sessions:
            raise ValueError(f"Session '{session.id}' already exists")
        self._sessions[session.id] = session.model_copy()

    async def find(self, session_id: str) -> AuthSession | None:
        session = self._sessions.get(session_id)
        return session.model_copy() if session is not None else None

    async def update(self, session_id: str, expires_at: datetime) -> None:
        self._sessions[session_id] = self._sessions[session_id].model_copy(update={"expires_at": expires_at})

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def find_all(self) -> list[AuthSession]:
        return [session.model_copy() for session in self._sessions.values()]

    async def find_by_user(self, user_id: str) -> list[AuthSession]:
        return [session.model_copy() for session in self._sessions.values() if session.user_id == user_id]
