class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is malformed or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when the record an operation needs does not exist."""


class ConflictError(DomainError):
    """Raised when an operation is not allowed in the current state."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
