from fastapi import APIRouter

from basicauth.core.modules.session.models import SessionView
from basicauth.web.deps import AppDep, SessionDep
from basicauth.web.openapi import ErrorResponse

router = APIRouter(tags=["sessions"])


@router.get(
    "/sessions",
    summary="List sessions",
    description="List active sessions. Admins see every session, other users only their own.",
    operation_id="listSessions",
    responses={
        200: {"description": "List of sessions"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_sessions(app: AppDep, session: SessionDep) -> list[SessionView]:
    return await app.list_sessions(session)


@router.post(
    "/sessions/{session_id}/kill",
    summary="Terminate session",
    description="Delete a session by ID. Its client is logged out on its next request.",
    operation_id="killSession",
    status_code=204,
    responses={
        204: {"description": "Session terminated"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
        403: {"model": ErrorResponse, "description": "Session belongs to another user"},
        404: {"model": ErrorResponse, "description": "Session not found"},
    },
)
async def kill_session(session_id: str, app: AppDep, session: SessionDep) -> None:
    await app.kill_session(session, session_id)
