class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AlreadyExistsError(ValidationError):
    """Raised when a write collides with a uniqueness rule (one attendance per day, unique e-mail)."""


class NotFoundError(DomainError):
    """Raised when the referenced record does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
