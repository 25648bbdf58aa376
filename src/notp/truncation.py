"""RFC 4226 dynamic truncation of an HMAC-SHA1 digest into a decimal code."""

import logging
from typing import Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import constant_time, hashes, hmac

from notp.errors import BackendUnavailableError, ConfigurationError


log = logging.getLogger(__name__)

MAX_COUNTER = 2**63 - 1


def generate(secret: Union[str, bytes], counter: int, digits: int = 6) -> str:
    """
    Generate an OTP code for a counter value.

    An empty secret is accepted for compatibility but should not be used.

    Args:
        secret: The shared HMAC key. A string is encoded as UTF-8.
        counter: The moving factor, between 0 and ``MAX_COUNTER``.
        digits: Number of digits in the output code (default: 6).

    Returns:
        A zero-padded decimal code of exactly ``digits`` characters.

    Raises:
        ConfigurationError: If the secret is not bytes or str, or the counter
            is out of range.
        BackendUnavailableError: If HMAC-SHA1 is not supported.
    """
    return generate_from_key(secret_bytes(secret), counter, digits)


def generate_from_key(key: bytes, counter: int, digits: int = 6) -> str:
    """Generate a code from an already normalized key."""
    digest = _hmac_sha1(key, encode_counter(counter))
    binary = dynamic_truncate(digest)

    # Keep leading zeros: format the low-order digits with a fixed width
    code = binary % (10**digits)
    return f"{code:0{digits}d}"


def secret_bytes(secret: Union[str, bytes]) -> bytes:
    """
    Normalize a secret to bytes.

    Args:
        secret: The secret as bytes or a UTF-8 string.

    Returns:
        The raw key bytes.

    Raises:
        ConfigurationError: If the secret has another type.
    """
    if isinstance(secret, str):
        key = secret.encode("utf-8")
    elif isinstance(secret, (bytes, bytearray, memoryview)):
        key = bytes(secret)
    else:
        raise ConfigurationError(
            f"secret must be bytes or str, got {type(secret).__name__}"
        )
    if not key:
        log.warning("Generating an OTP with an empty secret")
    return key


def encode_counter(counter: int) -> bytes:
    """
    Encode a counter as the 8-byte big-endian message fed to the HMAC.

    Raises:
        ConfigurationError: If the counter is not an integer in
            ``[0, MAX_COUNTER]``.
    """
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise ConfigurationError(f"counter must be an integer, got {counter!r}")
    if not 0 <= counter <= MAX_COUNTER:
        raise ConfigurationError(
            f"counter must be between 0 and {MAX_COUNTER}, got {counter}"
        )
    return counter.to_bytes(8, byteorder="big")


def dynamic_truncate(digest: bytes) -> int:
    """
    Extract a 31-bit integer from an HMAC digest (RFC 4226, Section 5.3).

    Args:
        digest: A 20-byte HMAC-SHA1 digest.

    Returns:
        The truncated value, in ``[0, 2**31 - 1]``.
    """
    offset = digest[19] & 0x0F
    return (
        ((digest[offset] & 0x7F) << 24)
        | ((digest[offset + 1] & 0xFF) << 16)
        | ((digest[offset + 2] & 0xFF) << 8)
        | (digest[offset + 3] & 0xFF)
    )


def tokens_equal(token: Union[str, bytes], code: str) -> bool:
    """
    Compare two codes without leaking where they differ.

    Raises:
        ConfigurationError: If the token is neither str nor bytes.
    """
    if isinstance(token, str):
        token = token.encode("utf-8")
    elif not isinstance(token, bytes):
        raise ConfigurationError(
            f"token must be str or bytes, got {type(token).__name__}"
        )
    return constant_time.bytes_eq(token, code.encode("utf-8"))


def _hmac_sha1(key: bytes, message: bytes) -> bytes:
    try:
        h = hmac.HMAC(key, hashes.SHA1())
    except UnsupportedAlgorithm as e:
        raise BackendUnavailableError(f"HMAC-SHA1 is not available: {e}") from e
    h.update(message)
    return h.finalize()
