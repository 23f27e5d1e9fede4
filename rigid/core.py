"""Signed ULID issuer and verifier."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

import ulid

from .codec import (
    decode_rigid_id,
    encode_rigid_id,
    extract_timestamp,
    extract_ulid,
    ulid_datetime,
)
from .config import Config
from .errors import (
    EmptySecretKeyError,
    IntegrityError,
    InvalidSignatureLengthError,
    RigidIdError,
)
from .ids import ULID_LENGTH, MonotonicULIDFactory
from .logging_setup import get_logger
from .signing import (
    DEFAULT_SIGNATURE_LENGTH,
    MAX_SIGNATURE_LENGTH,
    MIN_SIGNATURE_LENGTH,
    compute_signature,
    constant_time_equals,
    signature_text_length,
)

logger = get_logger("core")


@dataclass(frozen=True)
class VerifyResult:
    """Outcome of a successful verification."""

    valid: bool
    ulid: ulid.ULID
    metadata: str

    @property
    def ulid_str(self) -> str:
        """The ULID as its 26-character text."""
        return self.ulid.str

    @property
    def timestamp(self) -> datetime:
        """Creation time embedded in the ULID (UTC)."""
        return ulid_datetime(self.ulid)


class Rigid:
    """Generates and verifies HMAC-signed ULIDs.

    IDs have the form ``ULID-SIGNATURE`` or ``ULID-SIGNATURE-METADATA``. The
    signature is the first ``signature_length`` bytes of
    HMAC-SHA256(secret_key, ulid || metadata), base32 encoded, so it grows by
    ceil(8 * N / 5) characters rather than N.

    Instances are safe to share between threads. The only mutable state is the
    instance's own ULID factory, which serializes generation internally.

    Args:
        secret_key: Non-empty HMAC key. ``str`` keys are UTF-8 encoded.
        signature_length: Raw signature bytes to keep, between 4 and 32
        ulid_factory: ULID source; a fresh ``MonotonicULIDFactory`` by default
    """

    def __init__(
        self,
        secret_key: Union[bytes, bytearray, memoryview, str],
        signature_length: int = DEFAULT_SIGNATURE_LENGTH,
        *,
        ulid_factory: Optional[MonotonicULIDFactory] = None,
    ):
        if isinstance(secret_key, str):
            secret_key = secret_key.encode("utf-8")
        elif not isinstance(secret_key, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"secret_key must be bytes or str, got {type(secret_key).__name__}"
            )

        if len(secret_key) == 0:
            raise EmptySecretKeyError("Secret key cannot be empty")

        if (
            isinstance(signature_length, bool)
            or not isinstance(signature_length, int)
            or not MIN_SIGNATURE_LENGTH <= signature_length <= MAX_SIGNATURE_LENGTH
        ):
            raise InvalidSignatureLengthError(
                f"Signature length must be between {MIN_SIGNATURE_LENGTH} and "
                f"{MAX_SIGNATURE_LENGTH} bytes, got {signature_length!r}"
            )

        # Copy so the caller may reuse or wipe its buffer.
        self._secret_key = bytes(secret_key)
        self._signature_length = signature_length
        self._ulid_factory = ulid_factory or MonotonicULIDFactory()

        logger.debug("Rigid instance created - signature_length=%d", signature_length)

    @classmethod
    def from_config(
        cls, secret_key: Union[bytes, str], config: Optional[Config] = None
    ) -> "Rigid":
        """Create an instance using the signing section of a config."""
        config = config or Config()
        return cls(secret_key, config.signing.signature_length)

    def __repr__(self) -> str:
        return f"Rigid(signature_length={self._signature_length})"

    @property
    def signature_length(self) -> int:
        """Raw signature length in bytes."""
        return self._signature_length

    @property
    def signature_text_length(self) -> int:
        """Length of the encoded signature segment in characters."""
        return signature_text_length(self._signature_length)

    @property
    def id_length(self) -> int:
        """Length of an ID without metadata."""
        return ULID_LENGTH + 1 + self.signature_text_length

    def sign(self, ulid_str: str, metadata: Optional[str] = None) -> str:
        """Compute the signature text for a ULID and metadata."""
        return compute_signature(
            self._secret_key, ulid_str, metadata, self._signature_length
        )

    def generate(self, metadata: Optional[str] = None, *extra: str) -> str:
        """Generate a new signed ULID.

        Only one metadata value is bound to an ID. Additional positional
        values are accepted for compatibility and ignored.

        Args:
            metadata: Optional text bound to the ID; may contain hyphens

        Returns:
            Rigid ID string

        Raises:
            GenerationError: If no ULID can be produced
        """
        if metadata is not None and not isinstance(metadata, str):
            raise TypeError(f"metadata must be str, got {type(metadata).__name__}")

        if extra:
            logger.debug("Ignoring %d extra metadata value(s)", len(extra))

        ulid_str = self._ulid_factory.new_ulid().str
        signature = self.sign(ulid_str, metadata)

        return encode_rigid_id(ulid_str, signature, metadata)

    def verify(self, rigid_id: str) -> VerifyResult:
        """Check the integrity and authenticity of a rigid ID.

        Returns:
            VerifyResult with ``valid=True``, the ULID and the metadata

        Raises:
            FormatError: If the ID has fewer than two segments
            MalformedIdError: If the ULID segment is invalid
            IntegrityError: If the signature does not match
        """
        decoded = decode_rigid_id(rigid_id)

        supplied = decoded.signature.encode("utf-8")
        expected = self.sign(decoded.ulid_str, decoded.metadata).encode("ascii")

        if len(supplied) != len(expected):
            raise IntegrityError("Integrity verification failed")

        if not constant_time_equals(supplied, expected):
            raise IntegrityError("Integrity verification failed")

        return VerifyResult(valid=True, ulid=decoded.ulid, metadata=decoded.metadata)

    def is_valid(self, rigid_id: str) -> bool:
        """Return True if ``rigid_id`` is well formed and authentic."""
        try:
            return self.verify(rigid_id).valid
        except (RigidIdError, IntegrityError):
            return False

    def extract_ulid(self, rigid_id: str) -> ulid.ULID:
        """Return the embedded ULID. The signature is not checked."""
        return extract_ulid(rigid_id)

    def extract_timestamp(self, rigid_id: str) -> datetime:
        """Return the embedded creation time. The signature is not checked."""
        return extract_timestamp(rigid_id)
