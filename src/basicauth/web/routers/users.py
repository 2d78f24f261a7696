from fastapi import APIRouter
from pydantic import BaseModel, Field

from basicauth.core.modules.user.models import UserView
from basicauth.web.deps import AppDep, SessionDep
from basicauth.web.openapi import ErrorResponse

router = APIRouter(tags=["users"])


class CreateUserRequest(BaseModel):
    """Request to create a new user."""

    username: str = Field(..., min_length=1, description="Username for the new user")
    password: str = Field(..., min_length=1, description="Password for the new user")
    full_name: str = Field("", description="Display name")


@router.post(
    "/users",
    summary="Create new user",
    description="Create a new user account. Only accessible by admin users.",
    operation_id="createUser",
    responses={
        201: {"description": "User created successfully"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Admin privileges required"},
        400: {"model": ErrorResponse, "description": "Invalid request"},
    },
    status_code=201,
)
async def create_user(create_data: CreateUserRequest, app: AppDep, session: SessionDep) -> UserView:
    return await app.create_user(session, create_data.username, create_data.password, create_data.full_name)
