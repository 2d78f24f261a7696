from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

# Endpoints reachable without a session
PUBLIC_ENDPOINTS = {
    ("POST", "/api/v1/auth/login"),
    ("GET", "/health"),
}


def set_custom_openapi(app: FastAPI, cookie_name: str) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="BasicAuth API",
            version="0.1.0",
            summary="Cookie-bound server-side sessions",
            routes=app.routes,
        )

        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": cookie_name,
                "description": "Opaque session token issued by /auth/login",
            },
        }
        openapi_schema["security"] = [{"SessionCookie": []}]

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in PUBLIC_ENDPOINTS:
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Error response model for API errors."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid username or password", "type": "authentication_error"},
                {"message": "Session not found", "type": "not_found"},
                {"message": "Admin privileges required", "type": "access_denied"},
            ]
        }
    }
