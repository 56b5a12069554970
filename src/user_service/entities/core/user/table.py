"""User database table model."""

from sqlmodel import Field

from src.user_service.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    This represents how the User entity is stored in the database. The
    unique indexes are what ultimately guarantee that no two rows share a
    username or an email, even when two requests race past the service
    checks.
    """

    __tablename__ = "users"

    username: str = Field(unique=True, index=True, nullable=False)
    email: str = Field(unique=True, index=True, nullable=False)
    password: str = Field(nullable=False)
