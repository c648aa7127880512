"""
Domain exceptions.

Typed exceptions for explicit error handling.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    All package-specific exceptions inherit from this.
    Allows catching all domain errors with single except clause.
    """

    pass


class ConfigurationError(DomainError):
    """
    Settings are invalid.

    Raised when:
    - Unknown preferences backend
    - MONGODB_URI missing for the mongodb backend
    - Malformed numeric or boolean environment value

    Example:
        >>> raise ConfigurationError("Invalid PREFERENCES_BACKEND value: redis")
    """

    pass


# ═══════════════════════════════════════════════════════════
# INFRASTRUCTURE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class InfrastructureError(DomainError):
    """
    Infrastructure layer error.

    Base class for storage and decoding errors.
    """

    pass


class StorageError(InfrastructureError):
    """
    Durable read or write could not complete.

    Raised when:
    - Disk full or file not writable
    - MongoDB unreachable
    - Write rejected by the backend

    Mutations surface this to their caller. The live stream keeps the
    last committed value.

    Example:
        >>> raise StorageError("Write to /data/prefs.json failed: disk full")
    """

    pass


class DecodeError(InfrastructureError):
    """
    Stored record cannot be decoded into a UserState.

    Raised when:
    - Malformed JSON on disk
    - Unknown enum name (schema drift)
    - Field with the wrong type

    The preference store recovers from this by substituting defaults.

    Example:
        >>> raise DecodeError("Unknown theme_brand: 'NEON'")
    """

    pass
