"""rigid - HMAC-signed, time-sortable unique identifiers.

Main exports:
- Rigid: Issuer and verifier of signed ULIDs
- VerifyResult: Result of a successful verification
- Error classes: ConfigurationError, GenerationError, FormatError,
  MalformedIdError, IntegrityError
"""

from .codec import DecodedRigidId, decode_rigid_id, extract_timestamp, extract_ulid
from .core import Rigid, VerifyResult
from .errors import (
    ConfigurationError,
    EmptySecretKeyError,
    FormatError,
    GenerationError,
    IntegrityError,
    InvalidSignatureLengthError,
    MalformedIdError,
    RigidError,
    RigidIdError,
)
from .ids import MonotonicULIDFactory
from .signing import (
    DEFAULT_SIGNATURE_LENGTH,
    MAX_SIGNATURE_LENGTH,
    MIN_SIGNATURE_LENGTH,
    signature_text_length,
)
from .version import __version__

__all__ = [
    "Rigid",
    "VerifyResult",
    "DecodedRigidId",
    "MonotonicULIDFactory",
    "decode_rigid_id",
    "extract_ulid",
    "extract_timestamp",
    "signature_text_length",
    "DEFAULT_SIGNATURE_LENGTH",
    "MIN_SIGNATURE_LENGTH",
    "MAX_SIGNATURE_LENGTH",
    "RigidError",
    "ConfigurationError",
    "EmptySecretKeyError",
    "InvalidSignatureLengthError",
    "GenerationError",
    "RigidIdError",
    "FormatError",
    "MalformedIdError",
    "IntegrityError",
    "__version__",
]
