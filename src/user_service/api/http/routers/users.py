"""User API router.

Translates service outcomes into status codes: a rejected create or update
is a 409 with no body, a missing user is a 404 with no body. Only a typed
storage outage is reported differently, as a 503.
"""

from fastapi import APIRouter, Depends, Response, status
from loguru import logger

from src.user_service.api.http.deps import get_user_service
from src.user_service.api.http.schemas import UserCreate, UserPublic, UserUpdate
from src.user_service.core.exceptions import StorageUnavailableError
from src.user_service.core.services import UserService
from src.user_service.entities.core.user import User

router = APIRouter(prefix="/users", tags=["users"])

_REJECTED = {
    status.HTTP_409_CONFLICT: {"description": "Username or email already taken"},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "User storage unavailable"},
}
_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "User not found"}}


def _rejected(exc: Exception) -> Response:
    if isinstance(exc, StorageUnavailableError):
        logger.bind(error_type=type(exc).__name__).error("User storage unavailable: {}", exc)
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    logger.bind(error_type=type(exc).__name__).warning("User write rejected: {}", exc)
    return Response(status_code=status.HTTP_409_CONFLICT)


def _found_or_404(user: User | None) -> User | Response:
    if user is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return user


@router.post(
    "",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
    responses=_REJECTED,
)
def create_user(
    candidate: UserCreate,
    user_service: UserService = Depends(get_user_service),
) -> User | Response:
    """Create a new user."""
    try:
        return user_service.create_user(candidate.to_entity())
    except Exception as e:
        return _rejected(e)


@router.get("", response_model=list[UserPublic])
def get_all_users(
    user_service: UserService = Depends(get_user_service),
) -> list[User]:
    """List all users."""
    return user_service.get_all_users()


@router.get("/{user_id}", response_model=UserPublic, responses=_NOT_FOUND)
def get_user_by_id(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
) -> User | Response:
    """Get a user by ID."""
    return _found_or_404(user_service.get_user_by_id(user_id))


@router.put(
    "/{user_id}",
    response_model=UserPublic,
    responses={**_NOT_FOUND, **_REJECTED},
)
def update_user(
    user_id: int,
    changes: UserUpdate,
    user_service: UserService = Depends(get_user_service),
) -> User | Response:
    """Replace a user's username, email and password."""
    try:
        updated_user = user_service.update_user(user_id, changes.to_entity())
    except Exception as e:
        return _rejected(e)
    return _found_or_404(updated_user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
)
def delete_user(
    user_id: int,
    user_service: UserService = Depends(get_user_service),
) -> Response:
    """Delete a user."""
    if not user_service.delete_user(user_id):
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/email/{email}", response_model=UserPublic, responses=_NOT_FOUND)
def get_user_by_email(
    email: str,
    user_service: UserService = Depends(get_user_service),
) -> User | Response:
    """Get a user by email address."""
    return _found_or_404(user_service.find_by_email(email))


@router.get("/username/{username}", response_model=UserPublic, responses=_NOT_FOUND)
def get_user_by_username(
    username: str,
    user_service: UserService = Depends(get_user_service),
) -> User | Response:
    """Get a user by username."""
    return _found_or_404(user_service.find_by_username(username))
