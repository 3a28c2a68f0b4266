"""Shared fixtures for the FileSeal test suite."""

import pytest

from fileseal.security.kdf import KdfParams


@pytest.fixture
def fast_params():
    """Low-cost KDF parameters; only the work factor differs from the defaults."""
    return KdfParams(iterations=1000)


@pytest.fixture
def password():
    return "correcthorse"
