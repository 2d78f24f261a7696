from typing import Annotated, cast

from fastapi import Depends, Request

from basicauth.app import App
from basicauth.core.modules.session.models import AuthContext, AuthSession
from basicauth.errors import AuthenticationError


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_context(request: Request) -> AuthContext:
    """Get the authentication context resolved by AuthMiddleware."""
    ctx = getattr(request.state, "auth", None)
    if ctx is None:
        raise RuntimeError("AuthMiddleware is not installed")
    return cast(AuthContext, ctx)


async def get_required_session(ctx: Annotated[AuthContext, Depends(get_auth_context)]) -> AuthSession:
    """Get the current session, raising AuthenticationError for anonymous requests."""
    if ctx.session is None:
        raise AuthenticationError("Not authenticated")
    return ctx.session


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthContextDep = Annotated[AuthContext, Depends(get_auth_context)]
SessionDep = Annotated[AuthSession, Depends(get_required_session)]
