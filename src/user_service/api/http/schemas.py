"""Request and response bodies for the user endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.user_service.entities.core.user import User


class UserCreate(BaseModel):
    """Body of ``POST /users``. Any id supplied by the client is ignored."""

    username: str = Field(min_length=1, description="Unique login name")
    email: str = Field(min_length=1, description="Unique email address")
    password: str = Field(min_length=1, description="Password, stored as given")

    def to_entity(self) -> User:
        return User(username=self.username, email=self.email, password=self.password)


class UserUpdate(UserCreate):
    """Body of ``PUT /users/{user_id}``."""


class UserPublic(BaseModel):
    """User as returned to clients; the password is never serialized."""

    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
