"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """The change would break a structural invariant (active reservations,
    outstanding stock)."""


class AuthorizationError(DomainException):
    """The acting user may not perform this operation."""


class InsufficientStockError(DomainException):
    """No lot can satisfy the requested reservation."""


class ConfigurationError(DomainException):
    """Seed or lookup data required at startup is missing."""
