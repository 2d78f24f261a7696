"""Session management models."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any, Literal, Self

from pydantic import BaseModel, Field, field_validator, model_validator

from basicauth.core.db import MongoModel


class AuthSession(MongoModel):
    """Server-side session record.

    `id` is the SHA-256 hex digest of the bearer token; the token itself is
    never stored. Only `expires_at` changes after creation.
    """

    user_id: str
    expires_at: datetime

    @field_validator("expires_at")
    @classmethod
    def normalize_utc(cls, value: datetime) -> datetime:
        # Naive values from MongoDB are UTC; tz_aware clients use bson.tz_util.utc, which email.utils rejects
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


class SessionView(BaseModel):
    """Session information (API representation)."""

    id: str = Field(..., description="Session identifier")
    user_id: str = Field(..., description="Owner user ID")
    expires_at: datetime = Field(..., description="Absolute expiry time (UTC)")
    current: bool = Field(False, description="Whether this is the session of the requesting client")

    @classmethod
    def from_domain(cls, session: AuthSession, current_id: str | None = None) -> "SessionView":
        """Create view model from domain model."""
        return cls(id=session.id, user_id=session.user_id, expires_at=session.expires_at, current=session.id == current_id)


class CookieOptions(BaseModel):
    """Attributes of the session cookie. `expires` is always computed from the session."""

    name: str = "sid"
    path: str = "/"
    domain: str | None = None
    httponly: bool = True
    secure: bool = False
    samesite: Literal["lax", "strict", "none"] | None = "lax"


class AuthSettings(BaseModel):
    """Session lifetime settings, supplied at construction."""

    session_ttl: timedelta = timedelta(minutes=1440)
    renew_window: timedelta = timedelta(minutes=15)
    remember_ttl: timedelta = timedelta(days=90)
    cookie: CookieOptions = Field(default_factory=CookieOptions)

    @model_validator(mode="after")
    def check_durations(self) -> Self:
        for name in ("session_ttl", "renew_window", "remember_ttl"):
            if getattr(self, name) <= timedelta(0):
                raise ValueError(f"{name} must be positive")
        if self.renew_window >= self.session_ttl:
            raise ValueError("renew_window must be shorter than session_ttl")
        return self

    @classmethod
    def from_minutes(cls, session_ttl: int = 1440, renew_window: int = 15, **kwargs: Any) -> "AuthSettings":
        return cls(session_ttl=timedelta(minutes=session_ttl), renew_window=timedelta(minutes=renew_window), **kwargs)


class SessionState(StrEnum):
    """Outcome of validating the token presented by a request."""

    NO_TOKEN = "no_token"
    INVALID = "invalid"
    EXPIRED = "expired"
    VALID = "valid"
    RENEWED = "renewed"


@dataclass(frozen=True)
class SetCookie:
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class ClearCookie:
    pass


CookieAction = SetCookie | ClearCookie


@dataclass(frozen=True)
class Resolution:
    """Result of one validation pass: the state reached and what to do with the cookie."""

    state: SessionState
    session: AuthSession | None = None
    cookie: CookieAction | None = None


@dataclass
class AuthContext:
    """Per-request authentication state.

    Filled by the request binding, mutated by login/logout, and read back by
    the binding to write or clear the cookie on the response.
    """

    session: AuthSession | None = None
    cookie: CookieAction | None = None

    @classmethod
    def from_resolution(cls, resolution: Resolution) -> "AuthContext":
        return cls(session=resolution.session, cookie=resolution.cookie)

    def set_cookie(self, token: str, expires_at: datetime) -> None:
        self.cookie = SetCookie(token=token, expires_at=expires_at)

    def clear_cookie(self) -> None:
        self.cookie = ClearCookie()
