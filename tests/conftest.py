"""Shared test configuration."""

import os

import pytest

os.environ["NOTP_ENV"] = "test"

from notp.settings import get_settings  # noqa: E402

get_settings.cache_clear()


# RFC 4226 Appendix D / RFC 6238 Appendix B shared secret
RFC_SECRET = b"12345678901234567890"


@pytest.fixture
def secret():
    return RFC_SECRET


@pytest.fixture
def production_mode(monkeypatch):
    """Run a test as if the process were not in test mode."""
    monkeypatch.setenv("NOTP_ENV", "production")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
