from .identifier import (
    derive_identifier,
    extension_for,
    validate_deletion_token,
    validate_identifier,
)
from .stored_object import StoredObject
from .sweep_report import SweepReport

__all__ = [
    "StoredObject",
    "SweepReport",
    "derive_identifier",
    "extension_for",
    "validate_deletion_token",
    "validate_identifier",
]
