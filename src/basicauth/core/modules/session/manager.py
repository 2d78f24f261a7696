from collections.abc import Callable
from datetime import datetime

import structlog

from basicauth.core.modules.session.models import (
    AuthContext,
    AuthSession,
    AuthSettings,
    ClearCookie,
    Resolution,
    SessionState,
    SetCookie,
)
from basicauth.core.modules.session.store import SessionStore
from basicauth.core.modules.session.tokens import derive_session_id, generate_token
from basicauth.errors import AuthenticationError
from basicauth.utils import now, short_id

logger = structlog.get_logger(__name__)


class SessionManager:
    """Issues, validates, renews and revokes cookie-bound sessions.

    Every validation is evaluated against the store and the current time; no
    validity is cached between requests. A validation issues at most two store
    calls: a `find`, then one `update` (renewal) or `delete` (expiry).
    """

    def __init__(
        self,
        store: SessionStore,
        settings: AuthSettings | None = None,
        clock: Callable[[], datetime] = now,
    ) -> None:
        self.store = store
        self.settings = settings or AuthSettings()
        self._clock = clock

    async def login(self, ctx: AuthContext, user_id: str, remember: bool = False) -> AuthSession:
        """Start a new session for `user_id` and schedule its cookie on `ctx`.

        Earlier sessions of the same user are left untouched.
        """
        token = generate_token()
        ttl = self.settings.remember_ttl if remember else self.settings.session_ttl
        session = AuthSession(id=derive_session_id(token), user_id=user_id, expires_at=self._clock() + ttl)
        await self.store.save(session)

        ctx.session = session
        ctx.set_cookie(token, session.expires_at)
        logger.debug("session_created", user_id=user_id, session=short_id(session.id), remember=remember)
        return session

    async def logout(self, ctx: AuthContext) -> None:
        """End the session resolved for the current request."""
        if ctx.session is None:
            raise AuthenticationError("Not authenticated")

        await self.store.delete(ctx.session.id)
        logger.debug("session_deleted", user_id=ctx.session.user_id, session=short_id(ctx.session.id))
        ctx.session = None
        ctx.clear_cookie()

    async def kill(self, session_id: str) -> None:
        """Delete a session by identifier.

        The owner's cookie stops resolving on its next request.
        """
        await self.store.delete(session_id)
        logger.debug("session_killed", session=short_id(session_id))

    async def validate(self, token: str) -> AuthSession | None:
        """Return the session for `token`, renewing it when close to expiry."""
        resolution = await self.resolve(token)
        return resolution.session

    async def resolve(self, token: str | None) -> Resolution:
        if not token:
            return Resolution(SessionState.NO_TOKEN)

        session_id = derive_session_id(token)
        session = await self.store.find(session_id)
        if session is None:
            logger.debug("session_invalid", session=short_id(session_id))
            return Resolution(SessionState.INVALID, cookie=ClearCookie())

        current_time = self._clock()
        if current_time >= session.expires_at:
            await self.store.delete(session_id)
            logger.debug("session_expired", user_id=session.user_id, session=short_id(session_id))
            return Resolution(SessionState.EXPIRED, cookie=ClearCookie())

        if current_time < session.expires_at - self.settings.renew_window:
            return Resolution(SessionState.VALID, session, SetCookie(token, session.expires_at))

        expires_at = current_time + self.settings.session_ttl
        await self.store.update(session_id, expires_at)
        session = session.model_copy(update={"expires_at": expires_at})
        logger.debug("session_renewed", user_id=session.user_id, session=short_id(session_id))
        return Resolution(SessionState.RENEWED, session, SetCookie(token, expires_at))
