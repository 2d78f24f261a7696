"""Bearer tokens and the session identifiers derived from them."""

import hashlib
import secrets

TOKEN_BYTES = 18


def generate_token() -> str:
    """Return a fresh URL-safe bearer token with 144 bits of entropy."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def derive_session_id(token: str) -> str:
    """Map a bearer token to the identifier its session is stored under.

    SHA-256 is one-way, so a leaked session store does not yield usable cookies.
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
