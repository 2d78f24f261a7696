from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def short_id(session_id: str) -> str:
    """Prefix of a session id, safe to put in logs."""
    return session_id[:8]
