"""User domain entity."""

from typing import Any

from pydantic import Field

from src.user_service.entities.core._base import Entity


class User(Entity):
    """User entity representing an account in the system.

    This is the domain model passed between the controller, the service and
    the repository. Uniqueness of ``username`` and ``email`` is enforced by
    the service and backed by unique indexes in storage, not by the entity.
    """

    username: str = Field(description="Unique login name")
    email: str = Field(description="Unique email address")
    password: str = Field(description="Password, stored as given", repr=False)

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.username == other.username
            and self.email == other.email
            and self.password == other.password
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.username,
            self.email,
            self.password,
        ))
