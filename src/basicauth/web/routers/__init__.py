from basicauth.web.routers.auth import router as auth_router
from basicauth.web.routers.profile import router as profile_router
from basicauth.web.routers.sessions import router as sessions_router
from basicauth.web.routers.users import router as users_router

__all__ = [
    "auth_router",
    "profile_router",
    "sessions_router",
    "users_router",
]
