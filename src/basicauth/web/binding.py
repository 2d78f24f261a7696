"""Binds the session manager to cookies and per-request state."""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from basicauth.core.modules.session.manager import SessionManager
from basicauth.core.modules.session.models import AuthContext, ClearCookie, CookieOptions, SetCookie


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolves the session cookie before any endpoint runs.

    The resolved `AuthContext` is stored at `request.state.auth`. The request
    always proceeds; afterwards the cookie action left on the context (renewal,
    login, logout, invalid token) is written to the response.
    """

    def __init__(self, app: ASGIApp, manager: SessionManager) -> None:
        super().__init__(app)
        self.manager = manager

    @property
    def cookie_options(self) -> CookieOptions:
        return self.manager.settings.cookie

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        token = request.cookies.get(self.cookie_options.name)
        resolution = await self.manager.resolve(token)
        ctx = AuthContext.from_resolution(resolution)
        request.state.auth = ctx

        response = await call_next(request)
        apply_cookie(response, ctx, self.cookie_options)
        return response


def apply_cookie(response: Response, ctx: AuthContext, options: CookieOptions) -> None:
    if isinstance(ctx.cookie, SetCookie):
        response.set_cookie(
            key=options.name,
            value=ctx.cookie.token,
            expires=ctx.cookie.expires_at,
            path=options.path,
            domain=options.domain,
            secure=options.secure,
            httponly=options.httponly,
            samesite=options.samesite,
        )
    elif isinstance(ctx.cookie, ClearCookie):
        response.delete_cookie(
            key=options.name,
            path=options.path,
            domain=options.domain,
            secure=options.secure,
            httponly=options.httponly,
            samesite=options.samesite,
        )
