"""RFC 6238 TOTP (Time-based One-Time Password) on top of HOTP."""

import logging
import time
from typing import Optional, Union

from notp import hotp
from notp.hotp import VerifyResult
from notp.options import Options


log = logging.getLogger(__name__)

DEFAULT_WINDOW = 6


def counter_at(timestamp: float, step: float) -> int:
    """Return the number of whole time steps elapsed since the Unix epoch."""
    return int(timestamp // step)


def gen(secret: Union[str, bytes], options: Optional[Options] = None) -> str:
    """
    Generate the TOTP code for the current time step.

    Args:
        secret: The shared HMAC key. A string is encoded as UTF-8.
        options: ``digits``, ``step`` and the test-only ``now`` override.

    Returns:
        A zero-padded TOTP code string.
    """
    options = options or Options()
    return hotp.gen(secret, _current_counter(options), options)


def verify(
    token: Union[str, bytes],
    secret: Union[str, bytes],
    options: Optional[Options] = None,
) -> Optional[VerifyResult]:
    """
    Check a token against the codes around the current time step.

    The returned delta counts time steps, not seconds; multiply it by
    ``options.step`` to get the clock skew.

    Args:
        token: The code supplied by the user, as str or ASCII bytes.
        secret: The shared HMAC key.
        options: ``digits``, ``window`` (default: 6), ``step`` and ``now``.

    Returns:
        A VerifyResult with the step drift, or None if nothing matched.
    """
    options = options or Options()
    window = options.window_or(DEFAULT_WINDOW)
    return hotp.verify(
        token,
        secret,
        _current_counter(options),
        Options(digits=options.digits, window=window, step=options.step),
    )


def _current_counter(options: Options) -> int:
    if options.now is not None:
        log.warning("TOTP time has been overridden; this is only valid in tests")
        now = options.now
    else:
        now = time.time()
    return counter_at(now, options.step)
