"""Validated options shared by the HOTP and TOTP verifiers."""

import math
from dataclasses import dataclass
from typing import Optional

from notp.errors import ConfigurationError
from notp.settings import get_settings


DEFAULT_DIGITS = 6
MAX_DIGITS = 10
DEFAULT_STEP = 30


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


@dataclass(frozen=True)
class Options:
    """
    Configuration for code generation and verification.

    Args:
        digits: Number of digits in a code (1 to 10, default: 6).
        window: Number of counters searched on either side of the expected
            one. ``None`` selects the algorithm default (HOTP: 50, TOTP: 6).
        step: TOTP time step in seconds (default: 30).
        now: Unix time in seconds to use instead of the wall clock. Only
            accepted when the process runs in test mode.

    Raises:
        ConfigurationError: If any value is out of range, or ``now`` is given
            outside test mode.
    """

    digits: int = DEFAULT_DIGITS
    window: Optional[int] = None
    step: int = DEFAULT_STEP
    now: Optional[float] = None

    def __post_init__(self) -> None:
        if not _is_int(self.digits) or not 1 <= self.digits <= MAX_DIGITS:
            raise ConfigurationError(
                f"digits must be an integer between 1 and {MAX_DIGITS}, got {self.digits!r}"
            )
        if self.window is not None and (not _is_int(self.window) or self.window < 0):
            raise ConfigurationError(
                f"window must be a non-negative integer, got {self.window!r}"
            )
        if not _is_finite_number(self.step) or self.step <= 0:
            raise ConfigurationError(f"step must be a positive finite number, got {self.step!r}")
        if self.now is not None:
            if not get_settings().test_mode:
                raise ConfigurationError(
                    "cannot override time outside test mode (set NOTP_ENV=test)"
                )
            if not _is_finite_number(self.now) or self.now < 0:
                raise ConfigurationError(f"now must be a non-negative finite number, got {self.now!r}")

    def window_or(self, default: int) -> int:
        """Return the configured window, or ``default`` when unset."""
        return default if self.window is None else self.window
