"""Domain-specific exceptions raised at the boundaries of the analytics core."""

class ValidationError(ValueError):
    """Raised when caller-supplied data does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when an owner's snapshot or a requested record cannot be located."""


class PersistenceError(IOError):
    """Raised when a snapshot export cannot be read or is corrupted."""
