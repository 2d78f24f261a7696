import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from basicauth.errors import (
    AccessDeniedError,
    AuthenticationError,
    NotFoundError,
    UnsupportedAlgorithmError,
    UserError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

# First matching class wins; unlisted UserErrors are plain bad requests
USER_ERROR_RESPONSES: tuple[tuple[type[UserError], int, str], ...] = (
    (AuthenticationError, 401, "authentication_error"),
    (AccessDeniedError, 403, "access_denied"),
    (NotFoundError, 404, "not_found"),
    (ValidationError, 400, "validation_error"),
)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred."


def create_json_error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, "type": error_type})


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Map UserError subclasses to their HTTP status; the message is safe to show."""
    status_code, error_type = next(
        ((status, kind) for cls, status, kind in USER_ERROR_RESPONSES if isinstance(exc, cls)),
        (400, "bad_request"),
    )
    return create_json_error_response(status_code, str(exc), error_type)


async def unsupported_algorithm_handler(request: Request, exc: Exception) -> Response:
    """Stored credential hash names an unknown algorithm.

    Logged as a security event: the hash was corrupted or rolled back to a
    format this deployment does not accept. The client gets a generic 500.
    """
    tag = exc.tag if isinstance(exc, UnsupportedAlgorithmError) else None
    logger.warning("unsupported_hash_algorithm", security_event=True, tag=tag, path=request.url.path)
    return create_json_error_response(500, INTERNAL_ERROR_MESSAGE, "internal_server_error")


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Unexpected errors, including session store failures."""
    logger.error("unhandled_error", path=request.url.path, error=type(exc).__name__, exc_info=exc)
    return create_json_error_response(500, INTERNAL_ERROR_MESSAGE, "internal_server_error")
