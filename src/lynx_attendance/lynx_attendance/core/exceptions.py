class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    http_status = 400


class IllegalTransitionError(ValidationError):
    """Raised when an attendance status change is not allowed."""


class AuthenticationError(DomainError):
    """Raised when the caller is not logged in or credentials are invalid."""

    http_status = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    http_status = 403


class NotFoundError(DomainError):
    """Raised when a referenced record, user, team or project does not exist."""

    http_status = 404


class ConflictError(DomainError):
    """Raised when a write collides with an existing record."""

    http_status = 409


class DuplicateRecordError(Exception):
    """Raised by repositories when the store rejects a unique-key insert."""
