class DomainError(Exception):
    """Base exception for the worklog system."""


class ConfigurationError(DomainError):
    """Raised when store connection settings are missing or invalid."""


class StoreError(DomainError):
    """Raised when the persistent store cannot serve a request."""


class StoreReadError(StoreError):
    """Raised when reading a record fails."""


class StoreWriteError(StoreError):
    """Raised when creating or updating a record fails."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""
