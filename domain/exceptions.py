"""Domain exceptions for business rule violations."""


class DomainError(Exception):
    """Base exception for domain layer."""


class ValidationError(DomainError):
    """Raised when input validation fails."""


class ObjectNotFoundError(DomainError):
    """Raised when a stored object does not exist or the deletion token does not match."""


class InfrastructureError(DomainError):
    """Raised when infrastructure operations fail (disk I/O, rename, metadata)."""


class MetadataError(InfrastructureError):
    """Raised when out-of-band object metadata cannot be read or decoded."""
