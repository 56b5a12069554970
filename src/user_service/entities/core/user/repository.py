"""User repository for data access operations."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from src.user_service.core.exceptions import (
    DomainConflictError,
    StorageUnavailableError,
)

from .entity import User
from .table import UserTable

# Largest value a signed 64-bit INTEGER primary key can hold
MAX_USER_ID = 2**63 - 1


class UserRepository:
    """Data-access layer for users.

    Every write commits its own transaction. SQLAlchemy failures roll the
    session back and surface as ``DomainConflictError`` (unique index
    violations) or ``StorageUnavailableError`` (everything else).
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_id(self, user_id: int) -> User | None:
        if not 1 <= user_id <= MAX_USER_ID:
            return None
        with self._storage_errors("find_by_id"):
            row = self._session.get(UserTable, user_id)
        return self._to_entity(row)

    def find_by_email(self, email: str) -> User | None:
        statement = select(UserTable).where(UserTable.email == email)
        with self._storage_errors("find_by_email"):
            row = self._session.exec(statement).first()
        return self._to_entity(row)

    def find_by_username(self, username: str) -> User | None:
        statement = select(UserTable).where(UserTable.username == username)
        with self._storage_errors("find_by_username"):
            row = self._session.exec(statement).first()
        return self._to_entity(row)

    def find_all(self) -> list[User]:
        statement = select(UserTable).order_by(UserTable.id)
        with self._storage_errors("find_all"):
            rows = self._session.exec(statement).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def exists_by_id(self, user_id: int) -> bool:
        return self.find_by_id(user_id) is not None

    def save(self, user: User) -> User:
        """Insert ``user`` when it has no id, otherwise update the stored row.

        Returns the persisted representation, including the assigned id.
        """
        with self._storage_errors("save", user):
            row = None
            if user.id is not None:
                row = self._session.get(UserTable, user.id)

            if row is None:
                row = UserTable.model_validate(user, from_attributes=True)
            else:
                row.sqlmodel_update(
                    user.model_dump(include={"username", "email", "password"})
                )
                row.updated_at = datetime.now(UTC)

            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)

        return User.model_validate(row, from_attributes=True)

    def delete_by_id(self, user_id: int) -> None:
        if not 1 <= user_id <= MAX_USER_ID:
            return
        with self._storage_errors("delete_by_id"):
            row = self._session.get(UserTable, user_id)
            if row is None:
                return
            self._session.delete(row)
            self._session.commit()

    @staticmethod
    def _to_entity(row: UserTable | None) -> User | None:
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    @contextmanager
    def _storage_errors(self, operation: str, user: User | None = None) -> Iterator[None]:
        try:
            yield
        except IntegrityError as e:
            self._session.rollback()
            logger.warning("Unique constraint rejected user {}: {}", operation, e.orig)
            raise DomainConflictError(_conflict_message(e, user)) from e
        except SQLAlchemyError as e:
            self._session.rollback()
            logger.error(
                "User storage operation failed",
                extra={
                    "operation": operation,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            raise StorageUnavailableError(
                f"User storage unavailable during {operation}"
            ) from e


def _conflict_message(error: IntegrityError, user: User | None) -> str:
    detail = str(error.orig).lower()
    if user is not None:
        if "email" in detail:
            return f"User with email {user.email} already exists"
        if "username" in detail:
            return f"User with username {user.username} already exists"
    return "User already exists"
