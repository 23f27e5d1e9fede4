"""ULID generation and parsing utilities for rigid."""

import time
from typing import Any, Callable, Optional

import ulid
from ulid.api.api import Api
from ulid.providers import default, monotonic

from .errors import GenerationError, MalformedIdError

ULID_LENGTH = 26
TIMESTAMP_BITS = 48
RANDOMNESS_BITS = 80
MAX_TIMESTAMP_MS = (1 << TIMESTAMP_BITS) - 1
MAX_RANDOMNESS = (1 << RANDOMNESS_BITS) - 1

# Canonical Crockford base32 alphabet (upper case, no I, L, O or U).
CROCKFORD_ALPHABET = frozenset("0123456789ABCDEFGHJKMNPQRSTVWXYZ")

# A 26-char base32 string carries 130 bits; anything above "7" overflows 128.
_MAX_FIRST_CHAR = "7"


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


class ClockProvider(default.Provider):
    """ulid-py provider that reads time from an injectable millisecond clock.

    Args:
        clock: Callable returning the current time in Unix milliseconds
        entropy: Callable returning ``n`` random bytes; ``os.urandom`` if None
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        entropy: Optional[Callable[[int], bytes]] = None,
    ):
        self.clock = clock or now_ms
        self.entropy = entropy

    def timestamp(self) -> bytes:
        timestamp_ms = self.clock()
        if not 0 <= timestamp_ms <= MAX_TIMESTAMP_MS:
            raise GenerationError(
                f"Timestamp {timestamp_ms} is outside the 48-bit ULID range"
            )
        return timestamp_ms.to_bytes(TIMESTAMP_BITS // 8, byteorder="big")

    def randomness(self, timestamp: bytes) -> bytes:
        if self.entropy is None:
            return super().randomness(timestamp)
        return self.entropy(RANDOMNESS_BITS // 8)


class MonotonicULIDFactory:
    """Thread-safe monotonic ULID factory.

    Wraps ulid-py's monotonic provider. Every factory owns its own provider,
    so two factories in the same process never affect each other's ordering.
    Within one millisecond the randomness of the previous ULID is incremented
    by one, which keeps successive values strictly increasing.

    Args:
        clock: Callable returning the current time in Unix milliseconds
        entropy: Callable returning ``n`` random bytes
    """

    def __init__(
        self,
        clock: Optional[Callable[[], int]] = None,
        entropy: Optional[Callable[[int], bytes]] = None,
    ):
        self._api = Api(monotonic.Provider(ClockProvider(clock, entropy)))

    def new_ulid(self) -> ulid.ULID:
        """Generate a new monotonic ULID.

        Raises:
            GenerationError: If the clock is out of range or the randomness
                space for the current millisecond is exhausted
        """
        try:
            return self._api.new()
        except ValueError as e:
            raise GenerationError(f"Monotonic randomness exhausted: {e}") from e


def parse_id(id_str: str) -> ulid.ULID:
    """Parse a 26-character canonical ULID string.

    Only upper-case Crockford base32 is accepted. ulid-py would map lower case
    and the aliases I, L and O onto other characters, so such text would not
    round-trip to the segment the signature was computed over.

    Args:
        id_str: Candidate ULID text

    Returns:
        Parsed ULID

    Raises:
        MalformedIdError: If the text has the wrong length, contains
            non-canonical characters or does not fit in 128 bits
    """
    if not isinstance(id_str, str) or len(id_str) != ULID_LENGTH:
        raise MalformedIdError(f"ULID must be a {ULID_LENGTH}-character string")

    if not CROCKFORD_ALPHABET.issuperset(id_str):
        raise MalformedIdError("ULID contains non-canonical base32 characters")

    if id_str[0] > _MAX_FIRST_CHAR:
        raise MalformedIdError("ULID value overflows 128 bits")

    try:
        return ulid.from_str(id_str)
    except ValueError as e:
        raise MalformedIdError(f"Invalid ULID: {e}") from e


def is_valid_id(id_str: Any) -> bool:
    """Check if a value is a valid ULID string."""
    try:
        parse_id(id_str)
        return True
    except MalformedIdError:
        return False
