"""RFC 4226 HOTP (HMAC-based One-Time Password) generation and verification."""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from notp import truncation
from notp.options import Options


log = logging.getLogger(__name__)

DEFAULT_WINDOW = 50


@dataclass(frozen=True)
class VerifyResult:
    """
    A successful verification.

    Attributes:
        delta: Matched counter minus expected counter. Callers use it to
            resynchronize their stored counter or clock offset.
    """

    delta: int


def gen(secret: Union[str, bytes], counter: int, options: Optional[Options] = None) -> str:
    """
    Generate the HOTP code for a counter.

    Args:
        secret: The shared HMAC key. A string is encoded as UTF-8.
        counter: The moving counter value, kept and advanced by the caller.
        options: Generation options; only ``digits`` is used.

    Returns:
        A zero-padded HOTP code string.
    """
    options = options or Options()
    return truncation.generate(secret, counter, options.digits)


def verify(
    token: Union[str, bytes],
    secret: Union[str, bytes],
    counter: int,
    options: Optional[Options] = None,
) -> Optional[VerifyResult]:
    """
    Check a token against the codes around an expected counter.

    Counters from ``counter - window`` to ``counter + window`` are tried in
    ascending order and the first match wins. Candidates below zero or above
    ``truncation.MAX_COUNTER`` are skipped, never wrapped.

    Args:
        token: The code supplied by the user, as str or ASCII bytes.
        secret: The shared HMAC key.
        counter: The counter value the server expects next.
        options: ``digits`` and ``window`` (default window: 50).

    Returns:
        A VerifyResult with the counter drift, or None if nothing matched.

    Raises:
        ConfigurationError: If the secret, token or counter is invalid.
    """
    options = options or Options()
    window = options.window_or(DEFAULT_WINDOW)
    key = truncation.secret_bytes(secret)
    truncation.encode_counter(counter)  # reject an out-of-range expected counter

    low = max(0, counter - window)
    high = min(truncation.MAX_COUNTER, counter + window)

    for candidate in range(low, high + 1):
        code = truncation.generate_from_key(key, candidate, options.digits)
        if truncation.tokens_equal(token, code):
            delta = candidate - counter
            log.debug("HOTP token matched with delta %d", delta)
            return VerifyResult(delta=delta)

    log.debug("HOTP token did not match within window %d", window)
    return None
