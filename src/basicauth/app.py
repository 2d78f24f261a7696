from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import datetime

from basicauth.config import Config
from basicauth.core.core import Core
from basicauth.core.modules.session.manager import SessionManager
from basicauth.core.modules.session.models import AuthContext, AuthSession, SessionView
from basicauth.core.modules.session.store import SessionLister, SessionStore
from basicauth.core.modules.user.models import User, UserView
from basicauth.errors import AccessDeniedError, AuthenticationError, NotFoundError, ValidationError
from basicauth.utils import now


class App:
    """Facade for all application operations, validates permissions before delegating to Core."""

    def __init__(self, config: Config, store: SessionStore | None = None, clock: Callable[[], datetime] = now) -> None:
        self._core = Core(config, store=store, clock=clock)

    @property
    def session_manager(self) -> SessionManager:
        return self._core.sessions

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    async def login(self, ctx: AuthContext, username: str, password: str, remember: bool = False) -> UserView:
        """Check credentials and start a session bound to the request's cookie."""
        user = self._core.users.verify_credentials(username, password)
        if user is None:
            raise AuthenticationError("Invalid username or password")
        await self._core.sessions.login(ctx, user.id, remember=remember)
        return UserView.from_domain(user)

    async def logout(self, ctx: AuthContext) -> None:
        """End the current session."""
        await self._core.sessions.logout(ctx)

    async def get_current_user(self, session: AuthSession) -> UserView:
        return UserView.from_domain(self._resolve_session_user(session))

    async def change_password(self, session: AuthSession, old_password: str, new_password: str) -> None:
        """Change password for current user. Existing sessions stay valid."""
        user = self._resolve_session_user(session)
        self._core.users.change_password(user.id, old_password, new_password)

    async def create_user(self, session: AuthSession, username: str, password: str, full_name: str = "") -> UserView:
        """Create a new user (admin only)."""
        self._ensure_admin(session)
        return UserView.from_domain(self._core.users.create_user(username, password, full_name))

    async def list_sessions(self, session: AuthSession) -> list[SessionView]:
        """List sessions: all of them for admins, the caller's own otherwise."""
        user = self._resolve_session_user(session)
        lister = self._session_lister()
        sessions = await lister.find_all() if user.is_admin else await lister.find_by_user(user.id)
        return [SessionView.from_domain(s, current_id=session.id) for s in sessions]

    async def kill_session(self, session: AuthSession, session_id: str) -> None:
        """Terminate a session by ID. Non-admins may only terminate their own."""
        user = self._resolve_session_user(session)
        target = await self._core.store.find(session_id)
        if target is None:
            raise NotFoundError(f"Session '{session_id}' not found")
        if target.user_id != user.id and not user.is_admin:
            raise AccessDeniedError("Cannot terminate another user's session")
        await self._core.sessions.kill(session_id)

    # === Private resolver methods ===
    def _resolve_session_user(self, session: AuthSession) -> User:
        """Resolve the session owner. Sessions of deleted users count as unauthenticated."""
        if not self._core.users.has_user(session.user_id):
            raise AuthenticationError("Invalid or expired session")
        return self._core.users.get_user(session.user_id)

    def _ensure_admin(self, session: AuthSession) -> User:
        user = self._resolve_session_user(session)
        if not user.is_admin:
            raise AccessDeniedError("Admin privileges required")
        return user

    def _session_lister(self) -> SessionLister:
        store = self._core.store
        if not isinstance(store, SessionLister):
            raise ValidationError("Session store does not support listing sessions")
        return store
