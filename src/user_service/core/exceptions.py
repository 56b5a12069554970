"""Errors raised by the user service and its repository."""


class UserServiceError(Exception):
    """Base class for failures raised by the service layer."""


class DomainConflictError(UserServiceError):
    """Raised when a username or email is already taken by another user."""


class StorageUnavailableError(UserServiceError):
    """Raised when the database cannot be reached or the operation fails transiently."""
