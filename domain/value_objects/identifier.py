"""Identifier and deletion-token shapes for stored objects.

An identifier is the public, content-derived filename of an object:
16 lowercase hex characters (the content digest), a dot, and a short
lowercase extension. Anything else is treated as unknown, which keeps
path traversal attempts and internal temp files out of reach.
"""

from __future__ import annotations

import re
from pathlib import PurePath

DEFAULT_EXTENSION = "jpg"

IDENTIFIER_PATTERN = re.compile(r"^[a-f0-9]{16}\.[a-z]{1,5}$")
DELETION_TOKEN_PATTERN = re.compile(r"^[a-f0-9]{32}$")
EXTENSION_PATTERN = re.compile(r"^[a-z]{1,5}$")


def validate_identifier(candidate: str | None) -> str | None:
    """Return the candidate if it is a well-formed identifier, else None."""
    if candidate is None or not IDENTIFIER_PATTERN.fullmatch(candidate):
        return None
    return candidate


def validate_deletion_token(candidate: str | None) -> str | None:
    """Return the candidate if it is a 32-character lowercase hex token, else None."""
    if candidate is None or not DELETION_TOKEN_PATTERN.fullmatch(candidate):
        return None
    return candidate


def extension_for(original_filename: str | None) -> str:
    """Extract the identifier extension from an uploaded filename.

    Falls back to ``jpg`` when the filename has no suffix or when the suffix
    would not produce a valid identifier (too long, digits, punctuation).
    """
    if not original_filename:
        return DEFAULT_EXTENSION
    suffix = PurePath(original_filename).suffix.lower().lstrip(".")
    if not EXTENSION_PATTERN.fullmatch(suffix):
        return DEFAULT_EXTENSION
    return suffix


def derive_identifier(digest_hex: str, original_filename: str | None) -> str:
    """Build the identifier from a 64-bit hex digest and the uploaded filename."""
    identifier = f"{digest_hex}.{extension_for(original_filename)}"
    if validate_identifier(identifier) is None:
        msg = f"Digest {digest_hex!r} does not yield a valid identifier"
        raise ValueError(msg)
    return identifier
