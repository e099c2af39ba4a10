"""Domain layer exports."""

from domain.exceptions import (
    DomainError,
    InfrastructureError,
    MetadataError,
    ObjectNotFoundError,
    ValidationError,
)
from domain.services.lifetime_policy import LifetimePolicy
from domain.value_objects import StoredObject, SweepReport

__all__ = [
    "DomainError",
    "InfrastructureError",
    "LifetimePolicy",
    "MetadataError",
    "ObjectNotFoundError",
    "StoredObject",
    "SweepReport",
    "ValidationError",
]
