"""Wire format for rigid IDs.

A rigid ID is ``ULID-SIGNATURE`` or ``ULID-SIGNATURE-METADATA``. Metadata may
itself contain hyphens; everything after the second separator belongs to it.
Nothing in this module checks signatures.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import ulid

from .errors import FormatError
from .ids import parse_id

SEPARATOR = "-"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class DecodedRigidId:
    """The three components of a rigid ID."""

    ulid: ulid.ULID
    ulid_str: str
    signature: str
    metadata: str


def encode_rigid_id(ulid_str: str, signature: str, metadata: Optional[str] = None) -> str:
    """Join the components of a rigid ID into its text form."""
    rigid_id = ulid_str + SEPARATOR + signature
    if metadata:
        rigid_id += SEPARATOR + metadata
    return rigid_id


def split_rigid_id(rigid_id: str) -> tuple[str, str, str]:
    """Split a rigid ID into ULID text, signature text and metadata.

    Raises:
        FormatError: If the input is not a string or has fewer than two segments
    """
    if not isinstance(rigid_id, str):
        raise FormatError(f"Expected str, got {type(rigid_id).__name__}")

    parts = rigid_id.split(SEPARATOR)
    if len(parts) < 2:
        raise FormatError("Rigid ID must contain at least ULID and signature segments")

    return parts[0], parts[1], SEPARATOR.join(parts[2:])


def decode_rigid_id(rigid_id: str) -> DecodedRigidId:
    """Split a rigid ID and parse its ULID segment.

    Raises:
        FormatError: If the ID has fewer than two segments
        MalformedIdError: If the first segment is not a valid ULID
    """
    ulid_str, signature, metadata = split_rigid_id(rigid_id)
    parsed = parse_id(ulid_str)
    return DecodedRigidId(
        ulid=parsed, ulid_str=ulid_str, signature=signature, metadata=metadata
    )


def extract_ulid(rigid_id: str) -> ulid.ULID:
    """Return the ULID embedded in a rigid ID without verifying its signature."""
    ulid_str, _, _ = split_rigid_id(rigid_id)
    return parse_id(ulid_str)


def ulid_datetime(value: ulid.ULID) -> datetime:
    """Convert a ULID's millisecond timestamp to an aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=value.timestamp().int)


def extract_timestamp(rigid_id: str) -> datetime:
    """Return the creation time embedded in a rigid ID without verifying it."""
    return ulid_datetime(extract_ulid(rigid_id))
