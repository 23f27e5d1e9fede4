"""HMAC signing utilities for rigid."""

import base64
import hashlib
import hmac
from typing import Optional

HMAC_ALGORITHM = "sha256"
HMAC_DIGEST_SIZE = hashlib.new(HMAC_ALGORITHM).digest_size

DEFAULT_SIGNATURE_LENGTH = 8
MIN_SIGNATURE_LENGTH = 4
MAX_SIGNATURE_LENGTH = HMAC_DIGEST_SIZE


def signature_text_length(signature_length: int) -> int:
    """Number of base32 characters produced for ``signature_length`` raw bytes.

    Base32 expands every 5 bytes into 8 characters, so the text length is
    ceil(8 * N / 5): 4 bytes -> 7 chars, 8 -> 13, 16 -> 26, 32 -> 52.
    """
    return -(-8 * signature_length // 5)


def encode_signature(raw: bytes) -> str:
    """Encode signature bytes as unpadded, upper-case base32."""
    return base64.b32encode(raw).decode("ascii").rstrip("=")


def compute_signature(
    secret_key: bytes,
    ulid_str: str,
    metadata: Optional[str],
    signature_length: int,
) -> str:
    """Compute the signature text for a ULID and its metadata.

    Uses the formula: S = base32(HMAC-SHA256(key, utf8(ulid) || utf8(metadata))[:N])

    The ULID is always 26 characters, so no delimiter is needed between the
    two parts. Empty or missing metadata contributes no bytes.

    Args:
        secret_key: HMAC key
        ulid_str: 26-character ULID text
        metadata: Metadata bound to the ID, or None
        signature_length: Number of digest bytes to keep

    Returns:
        Base32 signature text
    """
    mac = hmac.new(secret_key, digestmod=HMAC_ALGORITHM)
    mac.update(ulid_str.encode("utf-8"))
    if metadata:
        mac.update(metadata.encode("utf-8"))

    return encode_signature(mac.digest()[:signature_length])


def constant_time_equals(supplied: bytes, expected: bytes) -> bool:
    """Compare two equal-length byte strings in constant time.

    Lengths are not secret and must be checked by the caller first.

    Raises:
        ValueError: If the buffers differ in length
    """
    if len(supplied) != len(expected):
        raise ValueError("constant_time_equals requires equal-length inputs")

    return hmac.compare_digest(supplied, expected)
