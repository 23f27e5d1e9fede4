"""Exceptions raised by rigid.

Input errors (``RigidIdError``) and integrity failures (``IntegrityError``)
are kept apart so callers can tell a malformed ID from a forged one.
"""


class RigidError(Exception):
    """Base exception for all rigid errors."""


class ConfigurationError(RigidError):
    """Raised when a Rigid instance or config file is misconfigured."""


class EmptySecretKeyError(ConfigurationError):
    """Raised when the secret key is empty."""


class InvalidSignatureLengthError(ConfigurationError):
    """Raised when the signature length is outside the allowed range."""


class GenerationError(RigidError):
    """Raised when the ULID factory cannot produce a value."""


class RigidIdError(RigidError):
    """Base exception for syntactically invalid rigid IDs."""


class FormatError(RigidIdError):
    """Raised when a rigid ID has fewer than two hyphen-separated segments."""


class MalformedIdError(RigidIdError):
    """Raised when the ULID segment of a rigid ID cannot be parsed."""


class IntegrityError(RigidError):
    """Raised when a rigid ID's signature does not match."""
