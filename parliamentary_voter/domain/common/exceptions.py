"""
Domain layer exceptions.

These exceptions represent domain-level errors that occur when
input is rejected or domain invariants are broken.
They should be caught and translated to appropriate responses
by whatever layer consumes the domain.
"""


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All domain exceptions should inherit from this class
    so they can be caught and handled uniformly.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(DomainError):
    """
    Raised when domain validation fails.

    Example: blank first name, birth date in the future, etc.
    """

    def __init__(self, message: str, field: str | None = None, value: object = None) -> None:
        details: dict[str, object] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidArgumentError(ValidationError):
    """
    Raised when a required argument is missing, empty or blank.

    Always a caller error: fix the input, do not retry.

    Example: constructing a domain event with the nil UUID as aggregate id.
    """


class InvariantViolationError(DomainError):
    """
    Raised when an entity invariant is violated.

    Invariants are rules that must always be true for an entity
    to be in a valid state.

    Example: an entity rehydrated with ``deleted_at`` set but ``is_deleted`` false.
    """

    def __init__(self, aggregate: str, invariant: str) -> None:
        message = f"Invariant violation in {aggregate}: {invariant}"
        super().__init__(message, {"aggregate": aggregate, "invariant": invariant})
        self.aggregate = aggregate
        self.invariant = invariant
