from datetime import timedelta
from typing import Literal

from pydantic_settings import BaseSettings

from basicauth.core.modules.session.models import AuthSettings, CookieOptions


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 3100
    forwarded_allow_ips: str = "127.0.0.1"  # Proxies trusted for X-Forwarded-Proto
    debug: bool = False
    database_url: str | None = None  # MongoDB URL; sessions are kept in memory when unset
    cors_origins: list[str] = []
    session_ttl_minutes: int = 1440
    renew_window_minutes: int = 15
    remember_days: int = 90  # Lifetime of "remember me" sessions
    cookie_name: str = "sid"
    cookie_domain: str | None = None
    cookie_secure: bool = False  # Set to True in production with HTTPS
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"
    admin_username: str = "admin"
    admin_password: str = "admin"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "BASICAUTH_",
        "extra": "ignore",
    }

    def auth_settings(self) -> AuthSettings:
        """Build the session core settings from the flat environment values."""
        return AuthSettings(
            session_ttl=timedelta(minutes=self.session_ttl_minutes),
            renew_window=timedelta(minutes=self.renew_window_minutes),
            remember_ttl=timedelta(days=self.remember_days),
            cookie=CookieOptions(
                name=self.cookie_name,
                domain=self.cookie_domain,
                secure=self.cookie_secure,
                samesite=self.cookie_samesite,
            ),
        )
