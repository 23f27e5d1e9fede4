"""Test configuration and fixtures for rigid."""

import pytest

from rigid.logging_setup import reset_logging

TEST_SECRET_KEY = b"test-secret-key-for-rigid-testing"


@pytest.fixture(autouse=True)
def clean_logging():
    """Drop handlers installed by a test so the next one starts fresh."""
    yield
    reset_logging()


@pytest.fixture
def secret_key():
    """Secret key shared by the test suite."""
    return TEST_SECRET_KEY


@pytest.fixture
def fake_clock():
    """Fixture providing a fake millisecond clock for deterministic ULIDs."""
    clock_ms = [1_700_000_000_000]

    def get_time():
        return clock_ms[0]

    def advance(dt_ms: int):
        clock_ms[0] += dt_ms
        return clock_ms[0]

    def set_time(value_ms: int):
        clock_ms[0] = value_ms

    get_time.advance = advance
    get_time.set = set_time
    return get_time
