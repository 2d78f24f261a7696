import secrets

import structlog

from basicauth.core.modules.credential.hasher import hash_password, verify_password
from basicauth.core.modules.user.models import User
from basicauth.core.modules.user.validators import validate_password, validate_username
from basicauth.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class UserService:
    """Keeps user accounts in memory and checks their credentials."""

    def __init__(self, admin_username: str = "admin", admin_password: str = "admin") -> None:
        self._users: dict[str, User] = {}
        self._admin_username = admin_username
        self._admin_password = admin_password
        # Compared against when the username is unknown, so lookups cost the same either way
        self._dummy_hash = hash_password(secrets.token_urlsafe(16))

    def get_user(self, user_id: str) -> User:
        """Get user by ID."""
        if user_id not in self._users:
            raise NotFoundError(f"User '{user_id}' not found")
        return self._users[user_id]

    def get_user_by_username(self, username: str) -> User:
        """Get user by username."""
        user = self._find_by_username(username)
        if user is None:
            raise NotFoundError(f"User '{username}' not found")
        return user

    def has_user(self, user_id: str) -> bool:
        return user_id in self._users

    def has_username(self, username: str) -> bool:
        return self._find_by_username(username) is not None

    def create_user(self, username: str, password: str, full_name: str = "", is_admin: bool = False) -> User:
        """Create user with hashed password."""
        validate_username(username)
        if self.has_username(username):
            raise ValidationError(f"User '{username}' already exists")

        validate_password(password)
        user = User(username=username, full_name=full_name, password_hash=hash_password(password), is_admin=is_admin)
        self._users[user.id] = user
        logger.debug("user_created", user_id=user.id, username=username)
        return user

    def verify_credentials(self, username: str, password: str) -> User | None:
        """Return the user when the password matches, None otherwise."""
        user = self._find_by_username(username)
        if user is None:
            verify_password(password, self._dummy_hash)
            return None
        return user if verify_password(password, user.password_hash) else None

    def change_password(self, user_id: str, old_password: str, new_password: str) -> None:
        """Replace the password hash after verifying the current password."""
        user = self.get_user(user_id)
        if not verify_password(old_password, user.password_hash):
            raise ValidationError("Invalid current password")

        validate_password(new_password)
        self._users[user_id] = user.model_copy(update={"password_hash": hash_password(new_password)})

    def ensure_admin_user_exists(self) -> None:
        """Create default admin user if not exists."""
        if not self.has_username(self._admin_username):
            self.create_user(self._admin_username, self._admin_password, full_name="Admin", is_admin=True)

    async def on_start(self) -> None:
        self.ensure_admin_user_exists()
        logger.debug("user_service_started", user_count=len(self._users))

    def _find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users.values() if u.username == username), None)
