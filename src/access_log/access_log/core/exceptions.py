class DomainError(Exception):
    """Base exception for business rule violations."""


class InvalidInput(DomainError):
    """Raised when input data is missing, blank or violates domain rules."""


class DuplicateBadge(InvalidInput):
    """Raised when a badge identifier is already assigned to another user."""


class NotFound(DomainError):
    """Raised when a requested user or log does not exist."""


class StoreUnavailable(DomainError):
    """Raised when the record store cannot complete an operation."""
