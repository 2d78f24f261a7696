from datetime import datetime
from typing import Protocol, runtime_checkable

from basicauth.core.modules.session.models import AuthSession


@runtime_checkable
class SessionStore(Protocol):
    """Storage contract for session records.

    Errors raised by an implementation propagate unchanged to the caller of
    the session manager; they are never retried.
    """

    async def save(self, session: AuthSession) -> None:
        """Insert a new record. Ids are unique; saving a duplicate is a caller bug."""

    async def find(self, session_id: str) -> AuthSession | None:
        """Return the record, or None when it does not exist."""

    async def update(self, session_id: str, expires_at: datetime) -> None:
        """Change the expiry of a record previously returned by `find`."""

    async def delete(self, session_id: str) -> None:
        """Remove a record. Deleting a missing id is not an error."""


@runtime_checkable
class SessionLister(Protocol):
    """Optional listing capability, used by session administration."""

    async def find_all(self) -> list[AuthSession]: ...

    async def find_by_user(self, user_id: str) -> list[AuthSession]: ...
