import secrets

from pydantic import BaseModel, Field

from basicauth.core.db import MongoModel


class User(MongoModel):
    """User domain model with credentials."""

    id: str = Field(alias="_id", serialization_alias="id", default_factory=lambda: secrets.token_hex(8))
    username: str
    full_name: str = ""
    password_hash: str  # <tag>$<salt>$<key>, see credential.hasher
    is_admin: bool = False


class UserView(BaseModel):
    """User account information (API representation)."""

    id: str = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    full_name: str = Field("", description="Display name")
    is_admin: bool = Field(False, description="Whether the user can manage other users' sessions")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, username=user.username, full_name=user.full_name, is_admin=user.is_admin)
