from fastapi import APIRouter
from pydantic import BaseModel, Field

from basicauth.core.modules.user.models import UserView
from basicauth.web.deps import AppDep, AuthContextDep
from basicauth.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """Authentication request."""

    username: str = Field(..., min_length=1, description="Username for authentication")
    password: str = Field(..., min_length=1, description="Password for authentication")
    remember: bool = Field(False, description="Keep the session for the extended 'remember me' lifetime")


@router.post(
    "/auth/login",
    summary="Authenticate user",
    description="Authenticate with username and password. The session token is returned in the session cookie.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep, ctx: AuthContextDep) -> UserView:
    return await app.login(ctx, login_data.username, login_data.password, remember=login_data.remember)


@router.post(
    "/auth/logout",
    summary="End session",
    description="Invalidate the current session and clear the session cookie.",
    operation_id="logout",
    status_code=204,
    responses={
        204: {"description": "Successfully logged out"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def logout(app: AppDep, ctx: AuthContextDep) -> None:
    await app.logout(ctx)
