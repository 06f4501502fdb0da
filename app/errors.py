"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
DUPLICATE_RESOURCE = "DUPLICATE_RESOURCE"
VALIDATION_ERROR = "VALIDATION_ERROR"
CONFLICT_ON_CREATE = "CONFLICT_ON_CREATE"
STORE_FAILURE = "STORE_FAILURE"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a referenced resource does not exist or is already soft-deleted."""

    pass


class DuplicateResourceError(DomainError):
    """Raised when attempting to create or update a resource that would violate a uniqueness constraint."""

    pass


class DomainValidationError(DomainError):
    """Raised when business rules or domain validation fail (e.g. invalid transitions, missing required fields)."""

    pass


class ValidationFailedError(DomainValidationError):
    """Raised when a write is rejected by collected validation rules.

    Carries every violation message, in rule order, so the caller can fix all
    of them at once. The write is never partially applied.
    """

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class ConflictOnCreateError(DomainError):
    """Raised when a concurrent create lost a uniqueness race (e.g. two teams for one manager).

    The whole request may be retried once.
    """

    pass
