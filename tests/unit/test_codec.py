"""Tests for the rigid ID wire format."""

from datetime import datetime, timezone

import pytest

from rigid.codec import (
    decode_rigid_id,
    encode_rigid_id,
    extract_timestamp,
    extract_ulid,
    split_rigid_id,
)
from rigid.errors import FormatError, MalformedIdError

ULID_TEXT = "01ARZ3NDEKTSV4RRFFQ69G5FAV"


class TestEncode:
    """Test joining rigid ID components."""

    def test_without_metadata(self):
        assert encode_rigid_id(ULID_TEXT, "MFRGG2BA") == f"{ULID_TEXT}-MFRGG2BA"

    def test_empty_metadata_is_omitted(self):
        assert encode_rigid_id(ULID_TEXT, "MFRGG2BA", "") == f"{ULID_TEXT}-MFRGG2BA"

    def test_with_metadata(self):
        assert (
            encode_rigid_id(ULID_TEXT, "MFRGG2BA", "user:alice:role:admin")
            == f"{ULID_TEXT}-MFRGG2BA-user:alice:role:admin"
        )


class TestSplit:
    """Test splitting rigid IDs into segments."""

    def test_two_segments(self):
        assert split_rigid_id(f"{ULID_TEXT}-SIG") == (ULID_TEXT, "SIG", "")

    def test_metadata_with_hyphens_is_rejoined(self):
        """Test that everything after the second hyphen is metadata."""
        assert split_rigid_id(f"{ULID_TEXT}-SIG-a-b--c-") == (ULID_TEXT, "SIG", "a-b--c-")

    def test_empty_signature_segment(self):
        assert split_rigid_id(f"{ULID_TEXT}-") == (ULID_TEXT, "", "")

    @pytest.mark.parametrize("value", ["", "nohyphens", ULID_TEXT])
    def test_single_segment_is_format_error(self, value):
        with pytest.raises(FormatError):
            split_rigid_id(value)

    @pytest.mark.parametrize("value", [None, 123, b"01ARZ3NDEKTSV4RRFFQ69G5FAV-SIG"])
    def test_non_string_is_format_error(self, value):
        with pytest.raises(FormatError):
            split_rigid_id(value)  # type: ignore


class TestDecode:
    """Test decoding rigid IDs."""

    def test_decode_components(self):
        decoded = decode_rigid_id(f"{ULID_TEXT}-SIG-user:alice")

        assert decoded.ulid.str == ULID_TEXT
        assert decoded.ulid_str == ULID_TEXT
        assert decoded.signature == "SIG"
        assert decoded.metadata == "user:alice"

    @pytest.mark.parametrize(
        "value",
        [
            "not-a-ulid-SIGNATURE",
            "invalid-ulid-signature",
            "12345-SIGNATURE",
            "ZZZZZZZZZZZZZZZZZZZZZZZZZZ-SIG",
            "no-hyphens-here",
        ],
    )
    def test_invalid_ulid_is_malformed(self, value):
        with pytest.raises(MalformedIdError):
            decode_rigid_id(value)

    def test_signature_is_not_checked(self):
        """Test that decoding accepts any signature text."""
        assert decode_rigid_id(f"{ULID_TEXT}-garbage").signature == "garbage"


class TestExtract:
    """Test unauthenticated extraction."""

    def test_extract_ulid(self):
        assert extract_ulid(f"{ULID_TEXT}-ANYTHING-meta").str == ULID_TEXT

    def test_extract_timestamp(self):
        timestamp = extract_timestamp(f"{ULID_TEXT}-ANYTHING")

        assert timestamp == datetime(2016, 7, 30, 23, 54, 10, 259000, tzinfo=timezone.utc)
        assert timestamp.tzinfo is timezone.utc

    def test_extract_errors(self):
        with pytest.raises(FormatError):
            extract_ulid("")
        with pytest.raises(MalformedIdError):
            extract_timestamp("bad-SIG")
