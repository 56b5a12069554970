from loguru import logger

from src.user_service.core.exceptions import DomainConflictError
from src.user_service.entities.core.user.entity import User
from src.user_service.entities.core.user.repository import UserRepository


class UserService:
    """Business rules for user accounts.

    Usernames and emails are unique. The checks run against the repository
    before any write, email first; the unique indexes on the table catch
    what slips through concurrently.
    """

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    def create_user(self, user: User) -> User:
        """Persist a new user after checking email and username are free.

        Args:
            user: Candidate user, without an id

        Returns:
            The stored user with its assigned id

        Raises:
            DomainConflictError: If the email or username is already taken
        """
        if self._user_repo.find_by_email(user.email) is not None:
            raise DomainConflictError(f"User with email {user.email} already exists")
        if self._user_repo.find_by_username(user.username) is not None:
            raise DomainConflictError(
                f"User with username {user.username} already exists"
            )

        created_user = self._user_repo.save(user)
        logger.info("Created user {} ({})", created_user.id, created_user.username)
        return created_user

    def get_user_by_id(self, user_id: int) -> User | None:
        return self._user_repo.find_by_id(user_id)

    def get_all_users(self) -> list[User]:
        return self._user_repo.find_all()

    def update_user(self, user_id: int, user: User) -> User | None:
        """Replace the stored fields of ``user_id`` with those of ``user``.

        A user may keep its own email and username; taking another user's
        raises ``DomainConflictError``. Returns ``None`` when no user has
        ``user_id``.
        """
        existing = self._user_repo.find_by_id(user_id)
        if existing is None:
            return None

        by_email = self._user_repo.find_by_email(user.email)
        if by_email is not None and by_email.id != user_id:
            raise DomainConflictError(f"User with email {user.email} already exists")
        by_username = self._user_repo.find_by_username(user.username)
        if by_username is not None and by_username.id != user_id:
            raise DomainConflictError(
                f"User with username {user.username} already exists"
            )

        user_to_update = user.model_copy(
            update={"id": user_id, "created_at": existing.created_at}
        )
        updated_user = self._user_repo.save(user_to_update)
        logger.info("Updated user {}", user_id)
        return updated_user

    def delete_user(self, user_id: int) -> bool:
        if not self._user_repo.exists_by_id(user_id):
            return False
        self._user_repo.delete_by_id(user_id)
        logger.info("Deleted user {}", user_id)
        return True

    def find_by_email(self, email: str) -> User | None:
        return self._user_repo.find_by_email(email)

    def find_by_username(self, username: str) -> User | None:
        return self._user_repo.find_by_username(username)
