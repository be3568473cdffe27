class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidFormatError(ValidationError):
    """Raised when a clock time is not a valid "HH:MM" string."""


class InvalidTransitionError(ValidationError):
    """Raised when a record status change is not allowed by the workflow."""


class NotFoundError(DomainError):
    """Raised when a requested record or report does not exist."""
