"""Domain-level errors.

Services wrap these in ``Err`` results to express business rule violations.
Route handlers inspect the error type and map it to an HTTP status code.
"""


class DomainError(Exception):
    """Base class for all domain errors."""

    @property
    def message(self) -> str:
        return str(self)


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class AuthenticationError(DomainError):
    """Supplied credentials do not match a stored account."""


class StoreError(DomainError):
    """The persistence layer failed to complete an operation."""
