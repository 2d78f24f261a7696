from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from basicauth.app import App
from basicauth.config import Config
from basicauth.errors import UnsupportedAlgorithmError, UserError
from basicauth.web.binding import AuthMiddleware
from basicauth.web.error_handlers import general_exception_handler, unsupported_algorithm_handler, user_error_handler
from basicauth.web.openapi import set_custom_openapi
from basicauth.web.routers import auth_router, profile_router, sessions_router, users_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="BasicAuth API", lifespan=lifespan)
    # Available before startup so tests can issue requests without running the lifespan
    app.state.app = app_instance
    app.state.config = config

    app.add_middleware(AuthMiddleware, manager=app_instance.session_manager)

    # Added last so it wraps AuthMiddleware and CORS preflights never touch the store
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health check endpoint (at root level, not versioned)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router, prefix="/api/v1")
    app.include_router(profile_router, prefix="/api/v1")
    app.include_router(sessions_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(UnsupportedAlgorithmError, unsupported_algorithm_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app, config.auth_settings().cookie.name)

    return app
