"""Tests for the truncation engine."""

import pytest
from cryptography.exceptions import UnsupportedAlgorithm

from notp.errors import BackendUnavailableError, ConfigurationError
from notp.truncation import (
    MAX_COUNTER,
    dynamic_truncate,
    encode_counter,
    generate,
    secret_bytes,
    tokens_equal,
)


# RFC 4226 Appendix D, tables 1 and 2
# (counter, HMAC-SHA1 hex digest, truncated decimal)
RFC4226_INTERMEDIATE = [
    (0, "cc93cf18508d94934c64b65d8ba7667fb7cde4b0", 1284755224),
    (1, "75a48a19d4cbe100644e8ac1397eea747a2d33ab", 1094287082),
    (2, "0bacb7fa082fef30782211938bc1c5e70416ff44", 137359152),
    (3, "66c28227d03a2d5529262ff016a1e6ef76557ece", 1726969429),
    (4, "a904c900a64b35909874b33e61c5938a8e15ed1c", 1640338314),
    (5, "a37e783d7b7233c083d4f62926c7a25f238d0316", 868254676),
    (6, "bc9cd28561042c83f219324d3c607256c03272ae", 1918287922),
    (7, "a4fb960c0bc06e1eabb804e5b397cdc4b45596fa", 82162583),
    (8, "1b3c89f65e6c9e883012052823443f048b4332db", 673399871),
    (9, "1637409809a679dc698207310c8c7fc07290d9e5", 645520489),
]


@pytest.mark.parametrize("counter,digest_hex,truncated", RFC4226_INTERMEDIATE)
def test_dynamic_truncate_rfc4226(counter, digest_hex, truncated):
    """Test truncation of the RFC 4226 intermediate HMAC values."""
    assert dynamic_truncate(bytes.fromhex(digest_hex)) == truncated


def test_dynamic_truncate_clears_top_bit():
    """Test that the most significant bit of the extracted word is masked."""
    digest = b"\xff" * 19 + b"\x00"
    assert dynamic_truncate(digest) == 0x7FFFFFFF


def test_encode_counter_big_endian():
    """Test the 8-byte big-endian counter encoding."""
    assert encode_counter(0) == b"\x00" * 8
    assert encode_counter(1) == b"\x00" * 7 + b"\x01"
    assert encode_counter(0x0102030405060708) == bytes(range(1, 9))
    assert encode_counter(MAX_COUNTER) == b"\x7f" + b"\xff" * 7


@pytest.mark.parametrize("counter", [-1, MAX_COUNTER + 1, 2**64])
def test_encode_counter_out_of_range(counter):
    """Test that counters outside the domain are rejected, not wrapped."""
    with pytest.raises(ConfigurationError, match="counter must be between"):
        encode_counter(counter)


@pytest.mark.parametrize("counter", ["1", 1.0, True])
def test_encode_counter_not_integer(counter):
    """Test that non-integer counters are rejected."""
    with pytest.raises(ConfigurationError, match="must be an integer"):
        encode_counter(counter)


def test_generate_preserves_leading_zeros(secret):
    """Test that codes keep their leading zeros."""
    # Counter 2 truncates to 137359152, nine decimal digits
    assert generate(secret, 2, digits=10) == "0137359152"


def test_generate_different_digits(secret):
    """Test generation with different digit counts."""
    assert generate(secret, 0, digits=6) == "755224"
    assert generate(secret, 0, digits=7) == "4755224"
    assert generate(secret, 0, digits=8) == "84755224"
    assert generate(secret, 0, digits=10) == "1284755224"
    assert generate(secret, 0, digits=1) == "4"


def test_generate_str_secret_is_utf8(secret):
    """Test that a str secret is used as its UTF-8 bytes, not decoded."""
    assert generate(secret.decode("ascii"), 0) == generate(secret, 0)


def test_generate_deterministic(secret):
    """Test that repeated calls with identical inputs agree."""
    for counter in (0, 1, 12345, MAX_COUNTER):
        codes = {generate(secret, counter, digits=8) for _ in range(5)}
        assert len(codes) == 1


def test_secret_bytes_invalid_type():
    """Test that unsupported secret types raise ConfigurationError."""
    with pytest.raises(ConfigurationError, match="secret must be bytes or str"):
        secret_bytes(12345)


def test_secret_bytes_empty_warns(caplog):
    """Test that an empty secret is allowed but logged."""
    with caplog.at_level("WARNING", logger="notp.truncation"):
        assert secret_bytes(b"") == b""
    assert "empty secret" in caplog.text


def test_tokens_equal():
    """Test constant-time token comparison."""
    assert tokens_equal("755224", "755224")
    assert not tokens_equal("755225", "755224")
    assert not tokens_equal("55224", "755224")
    assert not tokens_equal("", "755224")


def test_tokens_equal_bytes():
    """Test that bytes tokens are compared without conversion."""
    assert tokens_equal(b"755224", "755224")
    assert not tokens_equal(b"b'755224'", "755224")


def test_tokens_equal_invalid_type():
    """Test that unsupported token types raise ConfigurationError."""
    with pytest.raises(ConfigurationError, match="token must be str or bytes"):
        tokens_equal(755224, "755224")


def test_hmac_unavailable(secret, monkeypatch):
    """Test that a missing HMAC-SHA1 backend raises BackendUnavailableError."""

    def unsupported(*args, **kwargs):
        raise UnsupportedAlgorithm("sha1 is disabled")

    monkeypatch.setattr("notp.truncation.hmac.HMAC", unsupported)
    with pytest.raises(BackendUnavailableError, match="HMAC-SHA1 is not available"):
        generate(secret, 0)
