class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised by strict reads when no record exists for a key."""


class StoreError(DomainError):
    """Raised when the backing store fails (I/O, transport, SQL)."""


class RangeError(DomainError):
    """Raised when a date range is reversed or outside supported bounds."""
